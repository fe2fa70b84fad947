"""Goal routes for goal and milestone management."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import confirmation_required, get_coach_service, get_storage_service, get_today
from models.schemas import (
    AppData,
    Goal,
    GoalCreateRequest,
    GoalUpdateRequest,
    MilestoneCreateRequest,
)
from services import goal_service
from services.coach_service import CoachService
from services.storage_service import StorageService
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/goals", tags=["goals"])


async def _load_goal(storage: StorageService, user_id: str, goal_id: str) -> Goal:
    # Strict load: a backend failure must not look like a missing goal
    data = await storage.load_app_data(user_id)
    goal = goal_service.find_goal(data.goals, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail=f"Goal '{goal_id}' not found for user_id '{user_id}'")
    return goal


@router.get("/", response_model=List[Goal])
async def list_goals(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Get all goals for a user."""
    data = await storage.get_app_data(user_id)
    return data.goals


@router.post("/", response_model=AppData)
async def create_goal(
    payload: GoalCreateRequest,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: date = Depends(get_today),
):
    """Create a goal with no milestones."""
    try:
        goal = goal_service.new_goal(
            payload.title,
            payload.type,
            today,
            deadline=payload.deadline,
            description=payload.description,
        )
        logger.info(f"Creating goal '{goal.title}' for user: {user_id}")
        return await storage.save_goals(user_id, [goal])
    except Exception as e:
        logger.error(f"Error creating goal: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error creating goal: {str(e)}")


@router.post("/plan", response_model=AppData)
async def create_planned_goal(
    payload: GoalCreateRequest,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    coach: CoachService = Depends(get_coach_service),
    today: date = Depends(get_today),
):
    """
    Create a goal with AI-suggested milestones.
    A generic plan is used when the model is unavailable.
    """
    try:
        milestones = await coach.suggest_milestones(payload.title, payload.type)
        goal = goal_service.new_goal(
            payload.title,
            payload.type,
            today,
            deadline=payload.deadline,
            description=payload.description,
            milestones=milestones,
        )
        logger.info(f"Planned goal '{goal.title}' with {len(goal.tasks)} milestones for user: {user_id}")
        return await storage.save_goals(user_id, [goal])
    except Exception as e:
        logger.error(f"Error planning goal: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error planning goal: {str(e)}")


@router.put("/{goal_id}", response_model=AppData)
async def update_goal(
    goal_id: str,
    payload: GoalUpdateRequest,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Edit title, type, deadline or description."""
    try:
        goal = await _load_goal(storage, user_id, goal_id)
        updated = goal_service.edit_goal(goal, **payload.model_dump(exclude_unset=True))
        return await storage.save_goals(user_id, [updated])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating goal {goal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error updating goal: {str(e)}")


@router.delete(
    "/{goal_id}",
    response_model=AppData,
    dependencies=[Depends(confirmation_required("Delete this goal and all its milestones?"))],
)
async def delete_goal(
    goal_id: str,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Delete a goal."""
    try:
        await _load_goal(storage, user_id, goal_id)
        return await storage.delete_goal(user_id, goal_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting goal {goal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deleting goal: {str(e)}")


@router.post("/{goal_id}/complete", response_model=AppData)
async def toggle_goal_complete(
    goal_id: str,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Mark a goal done, or reopen it."""
    try:
        goal = await _load_goal(storage, user_id, goal_id)
        return await storage.save_goals(user_id, [goal_service.toggle_complete(goal)])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error toggling goal {goal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error toggling goal: {str(e)}")


@router.post("/{goal_id}/milestones", response_model=AppData)
async def add_milestone(
    goal_id: str,
    payload: MilestoneCreateRequest,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    if not payload.text.strip():
        raise HTTPException(status_code=422, detail="Milestone text must not be blank")
    try:
        goal = await _load_goal(storage, user_id, goal_id)
        return await storage.save_goals(user_id, [goal_service.add_milestone(goal, payload.text)])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding milestone to goal {goal_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error adding milestone: {str(e)}")


@router.post("/{goal_id}/milestones/{task_id}/toggle", response_model=AppData)
async def toggle_milestone(
    goal_id: str,
    task_id: str,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    try:
        goal = await _load_goal(storage, user_id, goal_id)
        if not any(task.id == task_id for task in goal.tasks):
            raise HTTPException(status_code=404, detail=f"Milestone '{task_id}' not found")
        return await storage.save_goals(user_id, [goal_service.toggle_milestone(goal, task_id)])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error toggling milestone {task_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error toggling milestone: {str(e)}")


@router.delete(
    "/{goal_id}/milestones/{task_id}",
    response_model=AppData,
    dependencies=[Depends(confirmation_required("Remove this milestone from the goal?"))],
)
async def delete_milestone(
    goal_id: str,
    task_id: str,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    try:
        goal = await _load_goal(storage, user_id, goal_id)
        if not any(task.id == task_id for task in goal.tasks):
            raise HTTPException(status_code=404, detail=f"Milestone '{task_id}' not found")
        return await storage.save_goals(user_id, [goal_service.remove_milestone(goal, task_id)])
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting milestone {task_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deleting milestone: {str(e)}")
