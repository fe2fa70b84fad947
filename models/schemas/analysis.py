"""AI analyses collection schema."""

import uuid

from pydantic import Field

from models.schemas.base import TrackerModel
from models.schemas.enums import AnalysisType


class AIAnalysis(TrackerModel):
    """A generated coaching report. Only the current day's reports are kept."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    date: str = Field(..., description="Day the report was generated, YYYY-MM-DD")
    type: AnalysisType = Field(..., description="weekly or monthly")
    content: str = Field(default="", description="Markdown report")
    read: bool = Field(default=False)
