"""Daily entries collection schema."""

from datetime import datetime, timezone
from typing import List

from pydantic import Field, field_validator

from models.schemas.base import TrackerModel
from models.schemas.todo import Todo
from utils.dates import parse_day_key


class DailyEntry(TrackerModel):
    """One calendar day of tasks and journaling for a user."""
    date: str = Field(..., description="Day key, YYYY-MM-DD")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update time"
    )
    todos: List[Todo] = Field(default_factory=list)
    journal: str = Field(default="", description="Free-form journal text")
    mood_score: int = Field(default=0, ge=0, le=10, description="Mood, 0-10")
    completed_count: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)
    repeat_daily: bool = Field(default=False, description="Copy these todos into tomorrow")

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        parse_day_key(value)
        return value

    @property
    def is_complete(self) -> bool:
        return self.total_count > 0 and self.completed_count == self.total_count
