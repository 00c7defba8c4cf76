from typing import List, Optional

import structlog

from poker_league.core.authorization import AdminPolicy
from poker_league.core.errors import ConflictError, NotFoundError
from poker_league.models.tournament_model import TournamentModel, TournamentStatus
from poker_league.schemas.tournament_schemas import TournamentCreate, TournamentUpdate
from poker_league.services.store import DocumentStore

logger = structlog.get_logger(__name__)


class TournamentService:
    def __init__(self, store: DocumentStore, policy: AdminPolicy):
        self.store = store
        self.policy = policy

    def get_all_tournaments(self) -> List[TournamentModel]:
        return self.store.load().tournaments

    def get_tournament_by_id(self, tournament_id: int) -> Optional[TournamentModel]:
        return self.store.load().find_tournament(tournament_id)

    def create_tournament(self, caller_id: Optional[int], tournament_in: TournamentCreate) -> TournamentModel:
        self.policy.require_admin(caller_id)
        with self.store.transaction() as document:
            tournament = TournamentModel(id=document.new_tournament_id(), **tournament_in.model_dump())
            document.tournaments.append(tournament)
            logger.info("tournament_created", tournament_id=tournament.id, title=tournament.title)
            return tournament

    def update_tournament(
        self,
        caller_id: Optional[int],
        tournament_id: int,
        tournament_update: TournamentUpdate,
    ) -> TournamentModel:
        self.policy.require_admin(caller_id)
        with self.store.transaction() as document:
            tournament = document.find_tournament(tournament_id)
            if tournament is None:
                raise NotFoundError("Tournament not found.")

            update_data = tournament_update.model_dump(exclude_unset=True, exclude_none=True)
            new_cap = update_data.get("max_players")
            if new_cap is not None and new_cap < len(tournament.players):
                raise ConflictError(
                    f"Cannot lower max players to {new_cap}; {len(tournament.players)} already registered."
                )
            new_status = update_data.get("status")
            if tournament.status == TournamentStatus.FINISHED and new_status not in (None, TournamentStatus.FINISHED):
                raise ConflictError("A finished tournament cannot be reopened.")
            for key, value in update_data.items():
                setattr(tournament, key, value)

            logger.info("tournament_updated", tournament_id=tournament_id, fields=sorted(update_data))
            return tournament

    def delete_tournament(self, caller_id: Optional[int], tournament_id: int) -> bool:
        """Removes the tournament and every registration that points at it."""
        self.policy.require_admin(caller_id)
        with self.store.transaction() as document:
            if document.find_tournament(tournament_id) is None:
                raise NotFoundError("Tournament not found.")
            document.tournaments = [t for t in document.tournaments if t.id != tournament_id]
            before = len(document.registrations)
            document.registrations = [r for r in document.registrations if r.tournament_id != tournament_id]
            logger.info(
                "tournament_deleted",
                tournament_id=tournament_id,
                registrations_removed=before - len(document.registrations),
            )
            return True
