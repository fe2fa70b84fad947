"""Shared FastAPI dependencies."""

from datetime import date
from typing import Callable

from fastapi import Depends, HTTPException, Query, Request

from services.coach_service import CoachService
from services.friend_service import FriendService
from services.report_gate import ReportGate
from services.storage_service import StorageService
from utils.dates import current_day, parse_day_key


def get_storage_service() -> StorageService:
    return StorageService()


def get_coach_service() -> CoachService:
    return CoachService()


def get_report_gate(
    storage: StorageService = Depends(get_storage_service),
    coach: CoachService = Depends(get_coach_service),
) -> ReportGate:
    return ReportGate(storage, coach)


def get_friend_service(storage: StorageService = Depends(get_storage_service)) -> FriendService:
    return FriendService(storage)


def get_today() -> date:
    return current_day()


def valid_day(date: str) -> str:
    """Path parameter check for ``YYYY-MM-DD`` day keys."""
    try:
        parse_day_key(date)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date '{date}', expected YYYY-MM-DD")
    return date


def confirmation_required(message: str) -> Callable[..., None]:
    """Destructive endpoints answer 428 with ``message`` until called with confirm=true.

    ``message`` may reference path parameters, e.g. ``{date}``.
    """
    def dependency(
        request: Request,
        confirm: bool = Query(False, description="Set to true to perform the destructive action"),
    ) -> None:
        if not confirm:
            raise HTTPException(
                status_code=428,
                detail={
                    "message": message.format(**request.path_params),
                    "hint": "Repeat the request with confirm=true",
                },
            )

    return dependency
