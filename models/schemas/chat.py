"""Coach chat schemas."""

from datetime import datetime, timezone
import uuid

from pydantic import Field

from models.schemas.base import TrackerModel
from models.schemas.enums import ChatRole


class ChatMessage(TrackerModel):
    """One turn of the coach conversation, kept client-side."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: ChatRole = Field(..., description="user or model")
    text: str = Field(..., description="Message text")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
