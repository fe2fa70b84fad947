"""Pure mutations on daily entries.

Every helper returns an updated copy with the denormalized counts and the
timestamp refreshed; the caller persists it.
"""

from typing import List, Optional

from models.schemas import DailyEntry, Todo
from utils.dates import utc_now


def blank_entry(date_str: str) -> DailyEntry:
    return DailyEntry(date=date_str)


def recount(entry: DailyEntry, todos: Optional[List[Todo]] = None) -> DailyEntry:
    """Recompute completed/total counts, optionally replacing the todos."""
    todos = list(entry.todos if todos is None else todos)
    return entry.model_copy(update={
        "todos": todos,
        "completed_count": sum(1 for todo in todos if todo.completed),
        "total_count": len(todos),
        "timestamp": utc_now(),
    })


def add_todo(entry: DailyEntry, text: str, linked_goal_id: Optional[str] = None) -> DailyEntry:
    todo = Todo(text=text.strip(), linked_goal_id=linked_goal_id or None)
    return recount(entry, entry.todos + [todo])


def toggle_todo(entry: DailyEntry, todo_id: str) -> DailyEntry:
    todos = [
        todo.model_copy(update={"completed": not todo.completed}) if todo.id == todo_id else todo
        for todo in entry.todos
    ]
    return recount(entry, todos)


def remove_todo(entry: DailyEntry, todo_id: str) -> DailyEntry:
    return recount(entry, [todo for todo in entry.todos if todo.id != todo_id])


def clear_missed(entry: DailyEntry) -> DailyEntry:
    """Drop the incomplete todos, leaving only finished ones."""
    return recount(entry, [todo for todo in entry.todos if todo.completed])


def update_journal(entry: DailyEntry, journal: str, mood_score: Optional[int] = None) -> DailyEntry:
    update = {"journal": journal, "timestamp": utc_now()}
    if mood_score is not None:
        update["mood_score"] = mood_score
    return entry.model_copy(update=update)


def has_todo(entry: DailyEntry, todo_id: str) -> bool:
    return any(todo.id == todo_id for todo in entry.todos)


def repeat_copies(todos: List[Todo]) -> List[Todo]:
    """Fresh, uncompleted copies of yesterday's todos for a repeating log."""
    return [Todo(text=todo.text, linked_goal_id=todo.linked_goal_id) for todo in todos]
