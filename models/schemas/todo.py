"""Todo schema shared by daily entries and goal milestones."""

from typing import Optional
import uuid

from pydantic import Field

from models.schemas.base import TrackerModel


class Todo(TrackerModel):
    """A task in a daily log or a goal milestone."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str = Field(default="", description="Task text")
    completed: bool = Field(default=False, description="Whether the task is done")
    linked_goal_id: Optional[str] = Field(None, description="Goal this task contributes to")
