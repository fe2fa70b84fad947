"""Spreadsheet export of a user's data, with a JSON fallback."""

from datetime import date
import io
import json
from typing import List

import pandas as pd
from pydantic import BaseModel

from models.schemas import AppData, Todo
from utils.dates import day_key
from utils.logger import setup_logger

logger = setup_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
JSON_MEDIA_TYPE = "application/json"

PROFILE_SHEET = "Profile Identity"
HISTORY_SHEET = "Daily Logs"
GOALS_SHEET = "Goals Protocol"


class ExportFile(BaseModel):
    filename: str
    media_type: str
    content: bytes
    fallback: bool = False


def checklist(todos: List[Todo]) -> str:
    """Flatten todos into ``[x] done; [ ] pending`` form."""
    return "; ".join(f"[{'x' if todo.completed else ' '}] {todo.text}" for todo in todos)


def profile_frame(data: AppData) -> pd.DataFrame:
    profile = data.profile
    rows = [
        ["Name", profile.name],
        ["Age", profile.age],
        ["Height (cm)", profile.height],
        ["Weight (kg)", profile.weight],
        ["App Version", data.version],
    ]
    return pd.DataFrame(rows, columns=["Metric", "Value"])


def history_frame(data: AppData) -> pd.DataFrame:
    rows = []
    for date_str in sorted(data.history):
        entry = data.history[date_str]
        rows.append([
            date_str,
            entry.total_count,
            entry.completed_count,
            entry.mood_score,
            entry.journal,
            checklist(entry.todos),
        ])
    return pd.DataFrame(
        rows,
        columns=["Date", "Total Tasks", "Completed Tasks", "Mood Score", "Journal Entry", "Tasks List"],
    )


def goals_frame(data: AppData) -> pd.DataFrame:
    rows = [
        [
            goal.title,
            goal.type.value,
            goal.deadline,
            round(goal.progress),
            "Yes" if goal.completed else "No",
            checklist(goal.tasks),
        ]
        for goal in data.goals
    ]
    return pd.DataFrame(
        rows,
        columns=["Title", "Type", "Deadline", "Progress (%)", "Completed", "Milestones"],
    )


def build_workbook(data: AppData) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        profile_frame(data).to_excel(writer, sheet_name=PROFILE_SHEET, index=False)
        history_frame(data).to_excel(writer, sheet_name=HISTORY_SHEET, index=False)
        goals_frame(data).to_excel(writer, sheet_name=GOALS_SHEET, index=False)
    return output.getvalue()


def build_export(data: AppData, today: date) -> ExportFile:
    """Workbook export; a JSON backup of the whole dataset if that fails."""
    stamp = day_key(today)
    try:
        return ExportFile(
            filename=f"NeuroTrack_Export_{stamp}.xlsx",
            media_type=XLSX_MEDIA_TYPE,
            content=build_workbook(data),
        )
    except Exception as e:
        logger.error(f"Excel export failed, falling back to JSON: {e}", exc_info=True)
        payload = json.dumps(data.model_dump(mode="json"), indent=2, ensure_ascii=False)
        return ExportFile(
            filename=f"neurotrack_backup_fallback_{stamp}.json",
            media_type=JSON_MEDIA_TYPE,
            content=payload.encode("utf-8"),
            fallback=True,
        )
