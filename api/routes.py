"""Core REST routes: dashboard load, profile, reset and export."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response

from api.dependencies import (
    confirmation_required,
    get_report_gate,
    get_storage_service,
    get_today,
)
from models.schemas import AppData, DashboardResponse, UserProfile
from services.dashboard_service import load_dashboard
from services.export_service import build_export
from services.report_gate import ReportGate
from services.storage_service import StorageService
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])


@router.get("/data", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    gate: ReportGate = Depends(get_report_gate),
    today: date = Depends(get_today),
):
    """
    Load everything for the client on startup.
    Stale reports are purged and today's weekly/monthly report is generated if due.
    """
    try:
        return await load_dashboard(storage, gate, user_id, today)
    except Exception as e:
        logger.error(f"Error loading dashboard for {user_id}: {e}", exc_info=True)
        # Keep the client usable with the default dataset
        data = AppData()
        return DashboardResponse(
            data=data,
            streak=0,
            profile_incomplete=not data.profile.is_complete(),
        )


@router.put("/profile", response_model=AppData)
async def update_profile(
    profile: UserProfile,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Save profile identity fields."""
    try:
        updated = await storage.update_profile(user_id, profile)
        logger.info(f"Updated profile for user: {user_id}")
        return updated
    except Exception as e:
        logger.error(f"Error updating profile: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error updating profile: {str(e)}")


@router.delete(
    "/data",
    response_model=AppData,
    dependencies=[Depends(confirmation_required(
        "Are you sure you want to reset all data? This will delete your profile, logs, goals and reports."
    ))],
)
async def reset_data(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Delete every row owned by the user."""
    try:
        return await storage.reset_user_data(user_id)
    except Exception as e:
        logger.error(f"Error resetting data for {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error resetting data: {str(e)}")


@router.get("/export")
async def export_data(
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
    today: date = Depends(get_today),
):
    """Download profile, daily logs and goals as a spreadsheet (JSON if that fails)."""
    try:
        data = await storage.get_app_data(user_id)
        export = build_export(data, today)
        headers = {"Content-Disposition": f'attachment; filename="{export.filename}"'}
        if export.fallback:
            headers["X-Export-Fallback"] = "json"
        return Response(content=export.content, media_type=export.media_type, headers=headers)
    except Exception as e:
        logger.error(f"Error exporting data for {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error exporting data: {str(e)}")


@router.put(
    "/data",
    response_model=AppData,
    dependencies=[Depends(confirmation_required(
        "Restoring a backup replaces your profile, logs, goals and reports. Continue?"
    ))],
)
async def restore_data(
    data: AppData,
    user_id: str = Query(..., description="User identifier"),
    storage: StorageService = Depends(get_storage_service),
):
    """Replace the user's data with a backup, e.g. the JSON export."""
    if not await storage.save_app_data(user_id, data):
        raise HTTPException(status_code=500, detail="Error restoring data")
    logger.info(f"Restored {len(data.history)} days and {len(data.goals)} goals for user: {user_id}")
    return await storage.get_app_data(user_id)
