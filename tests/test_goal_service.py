"""Tests for goal and milestone mutations."""

from datetime import date

from models.schemas import Goal, GoalType
from services import goal_service

TODAY = date(2024, 6, 3)


def test_new_goal_defaults_deadline_thirty_days_out():
    goal = goal_service.new_goal(" Run a 10k ", GoalType.LONG_TERM, TODAY)
    assert goal.title == "Run a 10k"
    assert goal.type == GoalType.LONG_TERM
    assert goal.deadline == "2024-07-03"
    assert goal.progress == 0


def test_new_goal_with_milestones():
    goal = goal_service.new_goal("Learn Spanish", GoalType.SHORT_TERM, TODAY, milestones=["a", "b", "c", "d"])
    assert [task.text for task in goal.tasks] == ["a", "b", "c", "d"]
    assert not any(task.completed for task in goal.tasks)


def test_progress_follows_milestones():
    goal = goal_service.new_goal("Ship", GoalType.SHORT_TERM, TODAY, milestones=["one", "two"])
    goal = goal_service.toggle_milestone(goal, goal.tasks[0].id)
    assert goal.progress == 50

    goal = goal_service.add_milestone(goal, "three")
    assert round(goal.progress, 2) == 33.33

    goal = goal_service.remove_milestone(goal, goal.tasks[1].id)
    assert goal.progress == 50


def test_completed_goal_is_full_progress():
    goal = goal_service.new_goal("Ship", GoalType.SHORT_TERM, TODAY, milestones=["one", "two"])
    done = goal_service.toggle_complete(goal)
    assert done.completed
    assert done.progress == 100

    reopened = goal_service.toggle_complete(done)
    assert reopened.progress == 0


def test_edit_goal_ignores_unset_values():
    goal = Goal(title="Old", description="keep me", deadline="2024-07-01")
    edited = goal_service.edit_goal(goal, title="New", description=None)
    assert edited.title == "New"
    assert edited.description == "keep me"
    assert edited.id == goal.id


def test_find_goal():
    first, second = Goal(title="a"), Goal(title="b")
    assert goal_service.find_goal([first, second], second.id) is second
    assert goal_service.find_goal([first], "missing") is None
