"""Friend comparison schemas."""

from typing import List

from pydantic import BaseModel, Field

from models.schemas.todo import Todo


class FriendSummary(BaseModel):
    """Another user's progress as shown on the friends page."""
    id: str = Field(..., description="Friend's user identifier")
    name: str = Field(default="")
    email: str = Field(default="")
    streak: int = Field(default=0)
    today_task_count: int = Field(default=0)
    today_tasks: List[Todo] = Field(default_factory=list)
    active_short_term_goals: int = Field(default=0)
    active_long_term_goals: int = Field(default=0)
