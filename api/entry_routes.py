"""Daily log routes: entries, todos, journal and missed tasks."""

import datetime as dt

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import confirmation_required, get_storage_service, get_today, valid_day
from models.schemas import (
    AppData,
    DailyEntry,
    JournalRequest,
    MissedTasksResponse,
    RepeatDailyRequest,
    StatusResponse,
    TodoCreateRequest,
)
from services import entry_service
from services.aggregation import collect_missed_tasks
from services.storage_service import StorageService
from utils.dates import day_key
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["entries"])


async def _load_entry(storage: StorageService, user_id: str, date: str) -> DailyEntry:
    try:
        return await storage.get_day_entry(user_id, date)
    except Exception as e:
        logger.error(f"Error loading entry {date} for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error loading entry: {str(e)}")


async def _entry_with_todo(storage: StorageService, user_id: str, date: str, todo_id: str) -> DailyEntry:
    entry = await _load_entry(storage, user_id, date)
    if not entry_service.has_todo(entry, todo_id):
        raise HTTPException(status_code=404, detail=f"Task '{todo_id}' not found on {date}")
    return entry


@router.get("/entries/{date}", response_model=DailyEntry)
async def get_entry(
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: dt.date = Depends(get_today),
):
    """
    Get the log for a day.
    An empty log for today is pre-filled with yesterday's tasks when yesterday repeats.
    """
    try:
        entry = await storage.get_day_entry(user_id, date)
        if not entry.todos and date == day_key(today):
            repeat_tasks = await storage.get_repeat_tasks(user_id, today)
            if repeat_tasks:
                entry = entry_service.recount(entry, repeat_tasks)
        return entry
    except Exception as e:
        logger.error(f"Error fetching entry {date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error fetching entry: {str(e)}")


@router.put("/entries/{date}", response_model=AppData)
async def save_entry(
    entry: DailyEntry,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Save a full day log. Counts are recomputed from the todos."""
    if entry.date != date:
        raise HTTPException(status_code=400, detail="Entry date does not match the URL")
    try:
        return await storage.save_day_entry(user_id, entry_service.recount(entry))
    except Exception as e:
        logger.error(f"Error saving entry {date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error saving entry: {str(e)}")


@router.delete(
    "/entries/{date}",
    response_model=AppData,
    dependencies=[Depends(confirmation_required(
        "Are you sure you want to delete this entire entry for {date}? This cannot be undone."
    ))],
)
async def delete_entry(
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Delete a whole day log."""
    try:
        return await storage.delete_day_entry(user_id, date)
    except Exception as e:
        logger.error(f"Error deleting entry {date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deleting entry: {str(e)}")


@router.put("/entries/{date}/journal", response_model=AppData)
async def save_journal(
    payload: JournalRequest,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Update the journal text and, optionally, the mood score."""
    try:
        entry = await storage.get_day_entry(user_id, date)
        updated = entry_service.update_journal(entry, payload.journal, payload.mood_score)
        return await storage.save_day_entry(user_id, updated)
    except Exception as e:
        logger.error(f"Error saving journal for {date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error saving journal: {str(e)}")


@router.put("/entries/{date}/repeat", response_model=StatusResponse)
async def set_repeat_daily(
    payload: RepeatDailyRequest,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Turn repeating of this day's tasks into the next day on or off."""
    success = await storage.set_repeat_daily(user_id, date, payload.repeat_daily)
    if not success:
        raise HTTPException(status_code=500, detail="Failed to update repeat status")
    return StatusResponse(success=True, detail={"date": date, "repeat_daily": payload.repeat_daily})


@router.post("/entries/{date}/todos", response_model=AppData)
async def add_todo(
    payload: TodoCreateRequest,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Add a task to a day, optionally linked to a goal."""
    if not payload.text.strip():
        raise HTTPException(status_code=422, detail="Task text must not be blank")
    try:
        entry = await storage.get_day_entry(user_id, date)
        updated = entry_service.add_todo(entry, payload.text, payload.linked_goal_id)
        return await storage.save_day_entry(user_id, updated)
    except Exception as e:
        logger.error(f"Error adding task on {date}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error adding task: {str(e)}")


@router.post("/entries/{date}/todos/{todo_id}/toggle", response_model=AppData)
async def toggle_todo(
    todo_id: str,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Flip a task between done and pending."""
    entry = await _entry_with_todo(storage, user_id, date, todo_id)
    try:
        return await storage.save_day_entry(user_id, entry_service.toggle_todo(entry, todo_id))
    except Exception as e:
        logger.error(f"Error toggling task {todo_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error toggling task: {str(e)}")


@router.delete(
    "/entries/{date}/todos/{todo_id}",
    response_model=AppData,
    dependencies=[Depends(confirmation_required("Do you really want to remove this task from your log?"))],
)
async def delete_todo(
    todo_id: str,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Remove a task from a day."""
    entry = await _entry_with_todo(storage, user_id, date, todo_id)
    try:
        return await storage.save_day_entry(user_id, entry_service.remove_todo(entry, todo_id))
    except Exception as e:
        logger.error(f"Error deleting task {todo_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deleting task: {str(e)}")


@router.get("/missed", response_model=MissedTasksResponse)
async def get_missed_tasks(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: dt.date = Depends(get_today),
):
    """Unfinished tasks from past days, newest first."""
    data = await storage.get_app_data(user_id)
    return collect_missed_tasks(data.history, today)


@router.delete(
    "/missed/{date}/todos/{todo_id}",
    response_model=AppData,
    dependencies=[Depends(confirmation_required("Remove this missed task record?"))],
)
async def delete_missed_task(
    todo_id: str,
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Dismiss one missed task from a past day."""
    entry = await _entry_with_todo(storage, user_id, date, todo_id)
    return await storage.save_day_entry(user_id, entry_service.remove_todo(entry, todo_id))


@router.delete(
    "/missed/{date}",
    response_model=AppData,
    dependencies=[Depends(confirmation_required(
        "Are you sure you want to clear all missed tasks for {date}?"
    ))],
)
async def clear_missed_day(
    date: str = Depends(valid_day),
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Drop every unfinished task from a past day, keeping the completed ones."""
    entry = await _load_entry(storage, user_id, date)
    if not entry.todos:
        raise HTTPException(status_code=404, detail=f"No log found for {date}")
    return await storage.save_day_entry(user_id, entry_service.clear_missed(entry))
