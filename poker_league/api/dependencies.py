from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from poker_league.core.authorization import AdminPolicy
from poker_league.core.config import get_settings
from poker_league.services.leaderboard_service import LeaderboardService
from poker_league.services.registration_service import RegistrationService
from poker_league.services.results_service import ResultsService
from poker_league.services.store import DocumentStore
from poker_league.services.tournament_service import TournamentService
from poker_league.services.user_service import UserService


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    # One store per process so every request shares the same writer lock.
    return DocumentStore(data_file_path=get_settings().DATA_FILE)


@lru_cache(maxsize=1)
def get_admin_policy() -> AdminPolicy:
    return AdminPolicy(get_settings().admin_ids)


def get_tournament_service(
    store: DocumentStore = Depends(get_store),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> TournamentService:
    return TournamentService(store, policy)


def get_registration_service(
    store: DocumentStore = Depends(get_store),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> RegistrationService:
    return RegistrationService(store, policy, starting_rating=get_settings().STARTING_RATING)


def get_results_service(
    store: DocumentStore = Depends(get_store),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> ResultsService:
    return ResultsService(store, policy)


def get_user_service(
    store: DocumentStore = Depends(get_store),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> UserService:
    return UserService(store, policy, starting_rating=get_settings().STARTING_RATING)


def get_leaderboard_service(store: DocumentStore = Depends(get_store)) -> LeaderboardService:
    return LeaderboardService(store, default_limit=get_settings().LEADERBOARD_LIMIT)


async def get_caller_id(x_user_id: Optional[str] = Header(None)) -> Optional[int]:
    """
    Reads the caller's user id from the X-User-Id header.
    Admin checks compare it against the allow-list; nothing verifies it.
    """
    if x_user_id is None or x_user_id == "":
        return None
    try:
        return int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-User-Id must be a numeric user id")
