"""Calendar day helpers.

Every derived view in the tracker works on calendar days keyed as
``YYYY-MM-DD`` strings, resolved in the configured timezone.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from config.settings import settings


def current_day() -> date:
    """Return today's calendar date in the configured timezone."""
    return datetime.now(ZoneInfo(settings.timezone)).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def day_key(day: date) -> str:
    """Format a date as a history key."""
    return day.isoformat()


def parse_day_key(key: str) -> date:
    """Parse a ``YYYY-MM-DD`` key, raising ValueError on bad input."""
    return date.fromisoformat(key)


def days_before(day: date, count: int) -> date:
    return day - timedelta(days=count)


def is_month_end(day: date) -> bool:
    """True when tomorrow is the first of a month."""
    return (day + timedelta(days=1)).day == 1


def is_sunday(day: date) -> bool:
    return day.weekday() == 6
