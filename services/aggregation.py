"""Derived views over the history map: heatmap, missed tasks, radar scores."""

from datetime import date
from typing import Dict, List, Mapping, Optional, Sequence

from models.schemas import (
    AIAnalysis,
    AppData,
    BalanceScores,
    DailyEntry,
    HeatmapCell,
    HeatmapResponse,
    HeatmapView,
    MissedDay,
    MissedTasksResponse,
)
from utils.dates import day_key, days_before

HEATMAP_DAYS: Dict[HeatmapView, int] = {
    HeatmapView.WEEK: 7,
    HeatmapView.MONTH: 30,
    HeatmapView.YEAR: 365,
}
MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

BALANCE_WINDOW_DAYS = 7
MENTAL_LOAD_FULL_TASKS = 10
MIN_JOURNAL_LENGTH = 10
SERIES_LENGTH = 14
DEFAULT_MOOD = 5


def filter_todays_analyses(analytics: Sequence[AIAnalysis], today: date) -> List[AIAnalysis]:
    """Keep only reports generated today; older ones vanish."""
    today_str = day_key(today)
    return [analysis for analysis in analytics if analysis.date == today_str]


def collect_missed_tasks(history: Mapping[str, DailyEntry], today: date) -> MissedTasksResponse:
    """Incomplete todos from days before today, newest day first."""
    today_str = day_key(today)
    days = []
    for date_str in sorted((d for d in history if d < today_str), reverse=True):
        missed = [todo for todo in history[date_str].todos if not todo.completed]
        if missed:
            days.append(MissedDay(date=date_str, todos=missed))
    return MissedTasksResponse(
        total_missed=sum(len(day.todos) for day in days),
        days=days,
    )


def heatmap_intensity(entry: Optional[DailyEntry]) -> int:
    """Bucket a day into activity levels 0-4."""
    if entry is None:
        return 0
    if entry.total_count > 0:
        ratio = entry.completed_count / entry.total_count
        if ratio == 1:
            return 4
        if ratio > 0.6:
            return 3
        if ratio > 0.3:
            return 2
        return 1
    # Journaling alone is mild activity
    return 1 if entry.journal else 0


def heatmap_label(today: date, view: HeatmapView) -> str:
    if view == HeatmapView.WEEK:
        start = days_before(today, HEATMAP_DAYS[view] - 1)
        start_month = MONTH_NAMES[start.month - 1]
        end_month = MONTH_NAMES[today.month - 1]
        if start_month == end_month:
            return f"Last 7 Days: {start_month} {start.day}-{today.day}"
        return f"Last 7 Days: {start_month} {start.day} - {end_month} {today.day}"
    if view == HeatmapView.MONTH:
        return f"This Month: {MONTH_NAMES[today.month - 1]} {today.year}"
    return f"This Year: {today.year}"


def build_heatmap(
    history: Mapping[str, DailyEntry],
    today: date,
    view: HeatmapView = HeatmapView.WEEK,
) -> HeatmapResponse:
    """One cell per day ending today, oldest first."""
    cells = []
    for offset in range(HEATMAP_DAYS[view] - 1, -1, -1):
        date_str = day_key(days_before(today, offset))
        cells.append(HeatmapCell(date=date_str, intensity=heatmap_intensity(history.get(date_str))))
    return HeatmapResponse(view=view.value, label=heatmap_label(today, view), cells=cells)


def _percent(numerator: float, denominator: float) -> int:
    if denominator <= 0:
        return 0
    return round(min(100.0, numerator / denominator * 100))


def balance_scores(data: AppData) -> BalanceScores:
    """Five independent 0-100 scores over the seven most recent logged days."""
    window = [data.history[key] for key in sorted(data.history)[-BALANCE_WINDOW_DAYS:]]
    total_tasks = sum(entry.total_count for entry in window)
    completed_tasks = sum(entry.completed_count for entry in window)
    journaled_days = sum(1 for entry in window if len(entry.journal) > MIN_JOURNAL_LENGTH)
    completed_goals = sum(1 for goal in data.goals if goal.completed)

    return BalanceScores(
        consistency=_percent(len(window), BALANCE_WINDOW_DAYS),
        task_focus=_percent(completed_tasks, total_tasks),
        goal_reach=_percent(completed_goals, len(data.goals)),
        journaling=_percent(journaled_days, BALANCE_WINDOW_DAYS),
        mental_load=_percent(total_tasks, MENTAL_LOAD_FULL_TASKS),
    )


def productivity_series(history: Mapping[str, DailyEntry]) -> List[Dict[str, object]]:
    """Completion percentage and mood for the most recent logged days."""
    series = []
    for date_str in sorted(history)[-SERIES_LENGTH:]:
        entry = history[date_str]
        series.append({
            "date": date_str,
            "productivity": _percent(entry.completed_count, entry.total_count),
            "mood": entry.mood_score or DEFAULT_MOOD,
        })
    return series


def missed_risk_series(history: Mapping[str, DailyEntry], today: date) -> List[Dict[str, object]]:
    """Incomplete todo counts for the most recent logged days before today."""
    today_str = day_key(today)
    dates = sorted(d for d in history if d < today_str)[-SERIES_LENGTH:]
    return [
        {"date": date_str, "missed": sum(1 for todo in history[date_str].todos if not todo.completed)}
        for date_str in dates
    ]
