"""Profile collection schema."""

from typing import Any

from pydantic import Field, field_validator

from models.schemas.base import TrackerModel


class UserProfile(TrackerModel):
    """User identity. Body metrics are free text, as entered."""
    name: str = Field(default="")
    age: str = Field(default="")
    height: str = Field(default="", description="Height in cm")
    weight: str = Field(default="", description="Weight in kg")
    email: str = Field(default="", description="Shown to friends in search results")

    @field_validator("name", "age", "height", "weight", "email", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        # Older clients stored numbers for age/height/weight
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def is_complete(self) -> bool:
        return all(value.strip() for value in (self.name, self.age, self.height, self.weight))
