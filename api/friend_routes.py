"""Friend routes: compare progress with connected users."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import confirmation_required, get_friend_service, get_today
from models.schemas import FriendSearchResponse, FriendSummary, StatusResponse
from services.friend_service import FriendService
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/v1/friends", tags=["friends"])


@router.get("/", response_model=List[FriendSummary])
async def list_friends(
    user_id: str = Query(..., description="User identifier"),
    friends: FriendService = Depends(get_friend_service),
    today: date = Depends(get_today),
):
    """Connected users with their streak and today's tasks, best streak first."""
    return await friends.list_friends(user_id, today)


@router.get("/search", response_model=FriendSearchResponse)
async def search_users(
    user_id: str = Query(..., description="User identifier"),
    q: str = Query(..., min_length=1, description="Part of a user's name"),
    friends: FriendService = Depends(get_friend_service),
):
    return FriendSearchResponse(results=await friends.search_users(user_id, q))


@router.post("/{friend_id}", response_model=StatusResponse)
async def connect_friend(
    friend_id: str,
    user_id: str = Query(..., description="User identifier"),
    friends: FriendService = Depends(get_friend_service),
):
    if friend_id == user_id:
        raise HTTPException(status_code=400, detail="You cannot add yourself as a friend")
    if not await friends.connect(user_id, friend_id):
        raise HTTPException(status_code=500, detail="Failed to add friend")
    return StatusResponse(success=True, detail={"friend_id": friend_id})


@router.delete(
    "/{friend_id}",
    response_model=StatusResponse,
    dependencies=[Depends(confirmation_required("Remove this friend from your network?"))],
)
async def disconnect_friend(
    friend_id: str,
    user_id: str = Query(..., description="User identifier"),
    friends: FriendService = Depends(get_friend_service),
):
    if not await friends.disconnect(user_id, friend_id):
        raise HTTPException(status_code=500, detail="Failed to remove friend")
    logger.info(f"User {user_id} removed friend {friend_id}")
    return StatusResponse(success=True, detail={"friend_id": friend_id})
