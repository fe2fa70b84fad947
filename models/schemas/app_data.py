"""Per-user aggregate returned to the client."""

from typing import Dict, List

from pydantic import Field

from models.schemas.analysis import AIAnalysis
from models.schemas.base import TrackerModel
from models.schemas.daily_entry import DailyEntry
from models.schemas.goal import Goal
from models.schemas.profile import UserProfile

SCHEMA_VERSION = 1


class AppData(TrackerModel):
    """Everything stored for one user. ``AppData()`` is the offline default."""
    profile: UserProfile = Field(default_factory=UserProfile)
    history: Dict[str, DailyEntry] = Field(default_factory=dict, description="Keyed by YYYY-MM-DD")
    goals: List[Goal] = Field(default_factory=list)
    analytics: List[AIAnalysis] = Field(default_factory=list)
    version: int = SCHEMA_VERSION
