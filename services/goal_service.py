"""Pure mutations on goals and their milestones."""

from datetime import date, timedelta
from typing import List, Optional

from models.schemas import Goal, GoalType, Todo
from utils.dates import day_key

DEFAULT_GOAL_DAYS = 30


def recompute_progress(goal: Goal) -> Goal:
    """Progress follows milestones; a completed goal is always at 100."""
    if goal.completed:
        progress = 100.0
    elif goal.tasks:
        progress = sum(1 for task in goal.tasks if task.completed) / len(goal.tasks) * 100
    else:
        progress = 0.0
    return goal.model_copy(update={"progress": progress})


def new_goal(
    title: str,
    goal_type: GoalType,
    today: date,
    deadline: Optional[str] = None,
    description: str = "",
    milestones: Optional[List[str]] = None,
) -> Goal:
    goal = Goal(
        title=title.strip(),
        type=goal_type,
        description=description,
        deadline=deadline or day_key(today + timedelta(days=DEFAULT_GOAL_DAYS)),
        tasks=[Todo(text=text) for text in (milestones or [])],
    )
    return recompute_progress(goal)


def add_milestone(goal: Goal, text: str) -> Goal:
    return recompute_progress(goal.model_copy(update={"tasks": goal.tasks + [Todo(text=text.strip())]}))


def toggle_milestone(goal: Goal, task_id: str) -> Goal:
    tasks = [
        task.model_copy(update={"completed": not task.completed}) if task.id == task_id else task
        for task in goal.tasks
    ]
    return recompute_progress(goal.model_copy(update={"tasks": tasks}))


def remove_milestone(goal: Goal, task_id: str) -> Goal:
    tasks = [task for task in goal.tasks if task.id != task_id]
    return recompute_progress(goal.model_copy(update={"tasks": tasks}))


def toggle_complete(goal: Goal) -> Goal:
    return recompute_progress(goal.model_copy(update={"completed": not goal.completed}))


def edit_goal(goal: Goal, **changes) -> Goal:
    """Apply title/type/deadline/description edits, ignoring unset values."""
    update = {key: value for key, value in changes.items() if value is not None}
    return goal.model_copy(update=update)


def find_goal(goals: List[Goal], goal_id: str) -> Optional[Goal]:
    return next((goal for goal in goals if goal.id == goal_id), None)
