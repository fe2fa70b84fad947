"""Read-only analytics over a user's history."""

from datetime import date
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_storage_service, get_today
from config.settings import settings
from models.schemas import BalanceScores, HeatmapResponse, HeatmapView
from services.aggregation import balance_scores, build_heatmap, missed_risk_series, productivity_series
from services.storage_service import StorageService
from services.streak import calculate_streak

router = APIRouter(prefix="/api/v1/insights", tags=["insights"])


@router.get("/streak")
async def get_streak(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: date = Depends(get_today),
) -> Dict[str, int]:
    data = await storage.get_app_data(user_id)
    return {"streak": calculate_streak(data.history, today, settings.streak_window_days)}


@router.get("/heatmap", response_model=HeatmapResponse)
async def get_heatmap(
    user_id: str = Query(..., description="User identifier"),
    view: HeatmapView = Query(HeatmapView.WEEK, description="week, month or year"),
    storage: StorageService = Depends(get_storage_service),
    today: date = Depends(get_today),
):
    """Activity intensity per day, oldest first."""
    data = await storage.get_app_data(user_id)
    return build_heatmap(data.history, today, view)


@router.get("/balance", response_model=BalanceScores)
async def get_balance(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Radar scores over the seven most recent logged days."""
    data = await storage.get_app_data(user_id)
    return balance_scores(data)


@router.get("/productivity")
async def get_productivity(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
) -> List[Dict[str, Any]]:
    """Completion percentage against mood for recent logged days."""
    data = await storage.get_app_data(user_id)
    return productivity_series(data.history)


@router.get("/missed-risk")
async def get_missed_risk(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: date = Depends(get_today),
) -> List[Dict[str, Any]]:
    data = await storage.get_app_data(user_id)
    return missed_risk_series(data.history, today)
