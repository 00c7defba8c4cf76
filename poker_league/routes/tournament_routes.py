from typing import Dict, List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path

from poker_league.api.dependencies import (
    get_caller_id,
    get_results_service,
    get_tournament_service,
)
from poker_league.core.errors import (
    ConcurrentModificationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageError,
)
from poker_league.models.tournament_model import TournamentModel
from poker_league.schemas.tournament_schemas import (
    ResultsSubmission,
    TournamentCreate,
    TournamentResponse,
    TournamentUpdate,
)
from poker_league.services.results_service import ResultsService
from poker_league.services.tournament_service import TournamentService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=List[TournamentModel], summary="List All Tournaments")
def list_tournaments(service: TournamentService = Depends(get_tournament_service)):
    """Every tournament in creation order. Publicly accessible."""
    try:
        return service.get_all_tournaments()
    except StorageError as e:
        logger.error("tournaments_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/{tournament_id}", response_model=TournamentModel, summary="Get Specific Tournament Details")
def get_tournament(
    tournament_id: int = Path(..., description="The ID of the tournament to retrieve."),
    service: TournamentService = Depends(get_tournament_service),
):
    try:
        tournament = service.get_tournament_by_id(tournament_id)
    except StorageError as e:
        logger.error("tournament_lookup_failed", tournament_id=tournament_id, error=str(e))
        raise HTTPException(status_code=500, detail="Server error")
    if not tournament:
        raise HTTPException(status_code=404, detail="Tournament not found")
    return tournament


@router.post("", response_model=TournamentResponse, summary="Create New Tournament (Admin Only)")
def create_tournament(
    tournament_in: TournamentCreate,
    caller_id: Optional[int] = Depends(get_caller_id),
    service: TournamentService = Depends(get_tournament_service),
):
    """
    Creates a tournament with an empty roster.

    - **title**, **date**, **buyin**, **prize**: display strings, all required.
    - **maxPlayers**: seat cap, at least 1.
    - **status** (optional): defaults to `open`.
    """
    try:
        tournament = service.create_tournament(caller_id, tournament_in)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("tournament_create_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Could not create tournament")
    return TournamentResponse(tournament=tournament)


@router.put("/{tournament_id}", response_model=TournamentModel, summary="Update Tournament (Admin Only)")
def update_tournament(
    tournament_update: TournamentUpdate,
    tournament_id: int = Path(..., description="The ID of the tournament to update."),
    caller_id: Optional[int] = Depends(get_caller_id),
    service: TournamentService = Depends(get_tournament_service),
):
    """Applies only the fields present in the body."""
    try:
        return service.update_tournament(caller_id, tournament_id, tournament_update)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("tournament_update_failed", tournament_id=tournament_id, error=str(e))
        raise HTTPException(status_code=500, detail="Could not update tournament")


@router.delete("/{tournament_id}", response_model=Dict[str, bool], summary="Delete Tournament (Admin Only)")
def delete_tournament(
    tournament_id: int = Path(..., description="The ID of the tournament to be deleted."),
    caller_id: Optional[int] = Depends(get_caller_id),
    service: TournamentService = Depends(get_tournament_service),
):
    """Deletes the tournament together with all of its registrations."""
    try:
        service.delete_tournament(caller_id, tournament_id)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("tournament_delete_failed", tournament_id=tournament_id, error=str(e))
        raise HTTPException(status_code=500, detail="Could not delete tournament")
    return {"success": True}


@router.post("/{tournament_id}/results", response_model=TournamentResponse, summary="Submit Results (Admin Only)")
def submit_results(
    submission: ResultsSubmission,
    tournament_id: int = Path(..., description="The ID of the finished tournament."),
    caller_id: Optional[int] = Depends(get_caller_id),
    service: ResultsService = Depends(get_results_service),
):
    """
    Records the final placings, marks the tournament finished and updates
    every known player's stats and rating. Accepted once per tournament.
    """
    try:
        tournament = service.apply_results(caller_id, tournament_id, submission.results)
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConcurrentModificationError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError as e:
        logger.error("results_submit_failed", tournament_id=tournament_id, error=str(e))
        raise HTTPException(status_code=500, detail="Could not save results")
    return TournamentResponse(tournament=tournament)
