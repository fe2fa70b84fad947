"""Collection schemas organized by collection type."""

from models.schemas.enums import AnalysisType, ChatRole, GoalType, HeatmapView
from models.schemas.todo import Todo
from models.schemas.daily_entry import DailyEntry
from models.schemas.goal import Goal
from models.schemas.analysis import AIAnalysis
from models.schemas.profile import UserProfile
from models.schemas.app_data import AppData, SCHEMA_VERSION
from models.schemas.chat import ChatMessage
from models.schemas.friend import FriendSummary
from models.schemas.api import (
    DashboardResponse,
    TodoCreateRequest,
    JournalRequest,
    RepeatDailyRequest,
    MissedDay,
    MissedTasksResponse,
    GoalCreateRequest,
    GoalUpdateRequest,
    MilestoneCreateRequest,
    ChatRequest,
    ChatResponse,
    HeatmapCell,
    HeatmapResponse,
    BalanceScores,
    FriendSearchResponse,
    StatusResponse,
)

__all__ = [
    "AnalysisType",
    "ChatRole",
    "GoalType",
    "HeatmapView",
    "Todo",
    "DailyEntry",
    "Goal",
    "AIAnalysis",
    "UserProfile",
    "AppData",
    "SCHEMA_VERSION",
    "ChatMessage",
    "FriendSummary",
    "DashboardResponse",
    "TodoCreateRequest",
    "JournalRequest",
    "RepeatDailyRequest",
    "MissedDay",
    "MissedTasksResponse",
    "GoalCreateRequest",
    "GoalUpdateRequest",
    "MilestoneCreateRequest",
    "ChatRequest",
    "ChatResponse",
    "HeatmapCell",
    "HeatmapResponse",
    "BalanceScores",
    "FriendSearchResponse",
    "StatusResponse",
]
