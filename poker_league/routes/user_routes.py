from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query

from poker_league.api.dependencies import get_leaderboard_service, get_user_service
from poker_league.core.errors import ConcurrentModificationError, NotFoundError, StorageError
from poker_league.models.user_model import UserModel
from poker_league.schemas.user_schemas import AdminCheckResponse, ProfileUpdate, UserStatsResponse
from poker_league.services.leaderboard_service import LeaderboardEntry, LeaderboardService
from poker_league.services.user_service import UserService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/user/{user_id}", response_model=UserModel, summary="Get (or Create) a Profile")
def get_profile(
    user_id: int = Path(..., description="External user id."),
    username: Optional[str] = Query(None, description="Used as the default nickname on first contact."),
    service: UserService = Depends(get_user_service),
):
    """First contact creates the profile with a starting rating."""
    try:
        return service.get_or_create(user_id, username)
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("profile_fetch_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/user/{user_id}", response_model=UserModel, summary="Update a Profile")
def update_profile(
    profile_in: ProfileUpdate,
    user_id: int = Path(..., description="External user id."),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.update_profile(user_id, nickname=profile_in.nickname, phone=profile_in.phone)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("profile_update_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/check-admin/{user_id}", response_model=AdminCheckResponse, summary="Check Admin Rights")
def check_admin(
    user_id: int = Path(..., description="External user id."),
    service: UserService = Depends(get_user_service),
):
    return AdminCheckResponse(is_admin=service.check_admin(user_id))


@router.get("/stats/{user_id}", response_model=UserStatsResponse, summary="Get Player Stats")
def get_stats(
    user_id: int = Path(..., description="External user id."),
    service: UserService = Depends(get_user_service),
):
    try:
        return service.get_stats(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError as e:
        logger.error("stats_fetch_failed", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/leaderboard", response_model=List[LeaderboardEntry], summary="Rating Leaderboard")
def leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of entries; defaults to the configured size."),
    service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Players by descending rating; ties keep sign-up order. Ranks are positional."""
    try:
        return service.top(limit)
    except StorageError as e:
        logger.error("leaderboard_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Server error")
