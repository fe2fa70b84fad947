"""Request and response bodies for the REST API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from models.schemas.analysis import AIAnalysis
from models.schemas.app_data import AppData
from models.schemas.chat import ChatMessage
from models.schemas.enums import AnalysisType, GoalType
from models.schemas.friend import FriendSummary
from models.schemas.todo import Todo
from utils.dates import parse_day_key


def _check_day_key(value: Optional[str]) -> Optional[str]:
    if value:
        parse_day_key(value)
    return value or None


class DashboardResponse(BaseModel):
    """Result of the initial data load."""
    data: AppData
    streak: int = Field(..., description="Consecutive completed days ending today")
    profile_incomplete: bool = Field(..., description="Prompt the user to finish their profile")
    celebration: Optional[AnalysisType] = Field(None, description="Report popup to show, if any")
    report: Optional[AIAnalysis] = Field(None, description="Report behind the popup")


class TodoCreateRequest(BaseModel):
    text: str = Field(..., min_length=1, description="Task text")
    linked_goal_id: Optional[str] = Field(None, description="Goal this task contributes to")


class JournalRequest(BaseModel):
    journal: str = Field(default="")
    mood_score: Optional[int] = Field(None, ge=0, le=10)


class RepeatDailyRequest(BaseModel):
    repeat_daily: bool = Field(..., description="Copy today's todos into tomorrow's log")


class MissedDay(BaseModel):
    date: str
    todos: List[Todo]


class MissedTasksResponse(BaseModel):
    total_missed: int
    days: List[MissedDay]


class GoalCreateRequest(BaseModel):
    title: str = Field(..., min_length=1)
    type: GoalType = Field(default=GoalType.SHORT_TERM)
    deadline: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to 30 days out")
    description: str = Field(default="")

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, value: Optional[str]) -> Optional[str]:
        return _check_day_key(value)


class GoalUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    type: Optional[GoalType] = None
    deadline: Optional[str] = None
    description: Optional[str] = None

    @field_validator("deadline")
    @classmethod
    def validate_deadline(cls, value: Optional[str]) -> Optional[str]:
        return _check_day_key(value)


class MilestoneCreateRequest(BaseModel):
    text: str = Field(..., min_length=1)


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, description="User's question for the coach")
    history: List[ChatMessage] = Field(default_factory=list, description="Conversation so far")


class ChatResponse(BaseModel):
    reply: ChatMessage


class HeatmapCell(BaseModel):
    date: str
    intensity: int = Field(..., ge=0, le=4)


class HeatmapResponse(BaseModel):
    view: str
    label: str
    cells: List[HeatmapCell]


class BalanceScores(BaseModel):
    """Radar axes, each 0-100."""
    consistency: int
    task_focus: int
    goal_reach: int
    journaling: int
    mental_load: int


class FriendSearchResponse(BaseModel):
    results: List[FriendSummary]


class StatusResponse(BaseModel):
    success: bool
    detail: Dict[str, Any] = Field(default_factory=dict)
