"""Enums for collection fields."""

from enum import Enum


class GoalType(str, Enum):
    """Goal horizon enum."""
    SHORT_TERM = "short-term"
    LONG_TERM = "long-term"


class AnalysisType(str, Enum):
    """AI report cadence enum."""
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ChatRole(str, Enum):
    """Chat message author."""
    USER = "user"
    MODEL = "model"


class HeatmapView(str, Enum):
    """Heatmap window."""
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
