"""Streak calculation over a user's daily history."""

from datetime import date
from typing import Mapping, Optional

from models.schemas import DailyEntry
from utils.dates import day_key, days_before

DEFAULT_WINDOW_DAYS = 365


def is_complete_day(entry: Optional[DailyEntry]) -> bool:
    """A day counts when it has tasks and all of them are done."""
    return entry is not None and entry.is_complete


def calculate_streak(
    history: Mapping[str, DailyEntry],
    today: date,
    window: int = DEFAULT_WINDOW_DAYS,
) -> int:
    """Count consecutive complete days ending at ``today``.

    Today is still in progress: it adds to the streak when complete but an
    incomplete today does not end it. From yesterday backwards the first
    incomplete or missing day stops the walk.
    """
    streak = 0
    for offset in range(window):
        entry = history.get(day_key(days_before(today, offset)))
        if is_complete_day(entry):
            streak += 1
        elif offset > 0:
            break
    return streak
