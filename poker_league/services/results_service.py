import re
from datetime import date
from typing import Callable, List, Optional

import structlog

from poker_league.core.authorization import AdminPolicy
from poker_league.core.errors import ConflictError, NotFoundError
from poker_league.models.tournament_model import ResultEntry, TournamentModel, TournamentStatus
from poker_league.models.user_model import HistoryEntry, UserModel
from poker_league.services.store import DocumentStore

logger = structlog.get_logger(__name__)

NON_DIGITS = re.compile(r"\D")
PODIUM_PLACES = 3
WINNER_BONUS = 50
PLACE_STEP = 10
OFF_PODIUM_PENALTY = -10


def parse_buyin(buyin: Optional[str]) -> int:
    """
    Strips every non-digit from a display buy-in and reads what's left.

    >>> parse_buyin("$100 entry")
    100
    >>> parse_buyin("free")
    0
    """
    digits = NON_DIGITS.sub("", buyin or "")
    return int(digits) if digits else 0


def rating_delta(place: int) -> int:
    if place <= PODIUM_PLACES:
        return WINNER_BONUS - (place - 1) * PLACE_STEP
    return OFF_PODIUM_PENALTY


def apply_result_to_user(
    user: UserModel,
    tournament: TournamentModel,
    result: ResultEntry,
    buyin_amount: int,
    played_on: str,
) -> int:
    """Updates stats, history and rating for one placing; returns the rating delta."""
    stats = user.stats
    stats.total_games += 1
    user.history.append(
        HistoryEntry(
            tournament_id=tournament.id,
            tournament_name=tournament.title,
            date=played_on,
            place=result.place,
            prize=result.prize or 0,
            buyin=buyin_amount,
        )
    )
    if result.place == 1:
        stats.wins += 1
    if result.prize > 0:
        stats.cashes += 1
        stats.profit += result.prize - buyin_amount

    delta = rating_delta(result.place)
    stats.rating += delta
    return delta


class ResultsService:
    def __init__(
        self,
        store: DocumentStore,
        policy: AdminPolicy,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.policy = policy
        self.today = today

    def apply_results(self, caller_id: Optional[int], tournament_id: int, results: List[ResultEntry]) -> TournamentModel:
        """
        Records final placings and finishes the tournament.

        Results are accepted once; a finished tournament rejects further
        submissions so stats are never counted twice. Placings for users
        that don't exist are stored on the tournament but skipped for stats.
        """
        self.policy.require_admin(caller_id)

        with self.store.transaction() as document:
            tournament = document.find_tournament(tournament_id)
            if tournament is None:
                raise NotFoundError("Tournament not found.")
            if tournament.status == TournamentStatus.FINISHED:
                raise ConflictError("Results already recorded for this tournament.")

            tournament.results = list(results)
            tournament.status = TournamentStatus.FINISHED

            buyin_amount = parse_buyin(tournament.buyin)
            played_on = self.today().isoformat()
            applied = 0
            for result in results:
                user = document.users.get(result.user_id)
                if user is None:
                    logger.info("results_unknown_user_skipped", tournament_id=tournament_id, user_id=result.user_id)
                    continue
                apply_result_to_user(user, tournament, result, buyin_amount, played_on)
                applied += 1

            logger.info(
                "results_applied",
                tournament_id=tournament_id,
                results=len(results),
                users_updated=applied,
            )
            return tournament
