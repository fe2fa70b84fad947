"""AI coach routes: chat, greeting and the day's reports."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_coach_service, get_storage_service, get_today
from models.schemas import (
    AIAnalysis,
    AnalysisType,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ChatRole,
    StatusResponse,
)
from services.aggregation import filter_todays_analyses
from services.coach_service import CoachService
from services.storage_service import StorageService
from utils.dates import day_key
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/coach", tags=["coach"])


@router.post("/chat", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    coach: CoachService = Depends(get_coach_service),
):
    """
    Ask the coach a question.
    The reply is grounded in the user's full dataset and the recent conversation.
    Provider failures come back as a model message rather than an error.
    """
    data = await storage.get_app_data(user_id)
    reply = await coach.chat(payload.message, data, payload.history)
    return ChatResponse(reply=ChatMessage(role=ChatRole.MODEL, text=reply))


@router.get("/greeting", response_model=ChatResponse)
async def greeting(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Opening message for a new conversation."""
    data = await storage.get_app_data(user_id)
    return ChatResponse(reply=ChatMessage(role=ChatRole.MODEL, text=CoachService.greeting(data)))


@router.get("/reports", response_model=List[AIAnalysis])
async def list_reports(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: date = Depends(get_today),
):
    """Reports generated today. Older reports have vanished."""
    data = await storage.get_app_data(user_id)
    return filter_todays_analyses(data.analytics, today)


@router.post("/reports/{analysis_id}/read", response_model=StatusResponse)
async def mark_report_read(
    analysis_id: str,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    if not await storage.mark_analysis_read(user_id, analysis_id):
        raise HTTPException(status_code=404, detail=f"Report '{analysis_id}' not found")
    return StatusResponse(success=True, detail={"id": analysis_id})


@router.post("/reports/{report_type}", response_model=AIAnalysis)
async def preview_report(
    report_type: AnalysisType,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    coach: CoachService = Depends(get_coach_service),
    today: date = Depends(get_today),
):
    """
    Generate a report on demand without storing it.
    Failures are returned as placeholder content.
    """
    data = await storage.get_app_data(user_id)
    if report_type == AnalysisType.MONTHLY:
        content = await coach.monthly_report(data, today)
    else:
        content = await coach.weekly_report(data, today)
    logger.info(f"Previewed {report_type.value} report for user: {user_id}")
    return AIAnalysis(date=day_key(today), type=report_type, content=content)
