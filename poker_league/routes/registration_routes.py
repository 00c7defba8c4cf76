from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path

from poker_league.api.dependencies import get_registration_service
from poker_league.core.errors import (
    ConcurrentModificationError,
    ConflictError,
    NotFoundError,
    StorageError,
)
from poker_league.models.registration_model import RegistrationModel
from poker_league.schemas.registration_schemas import CancelRequest, RegistrationRequest, SuccessResponse
from poker_league.services.registration_service import RegistrationService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/register", response_model=SuccessResponse, summary="Register For a Tournament")
def register(
    request_in: RegistrationRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """
    Takes a seat in an open tournament. Fails when the tournament is full,
    finished, or the user already holds a seat.
    """
    try:
        service.register(
            tournament_id=request_in.tournament_id,
            user_id=request_in.user_id,
            username=request_in.username,
            nickname=request_in.nickname,
            phone=request_in.phone,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("registration_failed", tournament_id=request_in.tournament_id, error=str(e))
        raise HTTPException(status_code=500, detail="Server error")
    return SuccessResponse(message="Registration confirmed!")


@router.post("/cancel", response_model=SuccessResponse, summary="Cancel a Registration")
def cancel(
    request_in: CancelRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Idempotent: cancelling a seat that isn't held still succeeds."""
    try:
        service.cancel(request_in.tournament_id, request_in.user_id)
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("cancel_failed", tournament_id=request_in.tournament_id, error=str(e))
        raise HTTPException(status_code=500, detail="Server error")
    return SuccessResponse()


@router.get("/check/{user_id}", response_model=List[RegistrationModel], summary="List a User's Registrations")
def check_registrations(
    user_id: int = Path(..., description="The user whose registrations to list."),
    service: RegistrationService = Depends(get_registration_service),
):
    return service.registrations_for_or_empty(user_id)
