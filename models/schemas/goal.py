"""Goal collection schema."""

from typing import List
import uuid

from pydantic import Field

from models.schemas.base import TrackerModel
from models.schemas.enums import GoalType
from models.schemas.todo import Todo


class Goal(TrackerModel):
    """Goal collection model."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str = Field(..., description="Name of the goal")
    description: str = Field(default="")
    type: GoalType = Field(default=GoalType.SHORT_TERM, description="short-term or long-term")
    deadline: str = Field(default="", description="Deadline day key, YYYY-MM-DD")
    completed: bool = Field(default=False)
    progress: float = Field(default=0.0, ge=0, le=100, description="Completion percentage")
    tasks: List[Todo] = Field(default_factory=list, description="Milestones")
