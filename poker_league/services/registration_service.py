from typing import List, Optional

import structlog

from poker_league.core.authorization import AdminPolicy
from poker_league.core.errors import ConflictError, NotFoundError, StorageError
from poker_league.models.registration_model import RegistrationModel
from poker_league.models.tournament_model import RosterEntry, TournamentStatus
from poker_league.models.user_model import DEFAULT_RATING
from poker_league.services.store import DocumentStore
from poker_league.services.user_service import apply_profile_changes, get_or_create_user

logger = structlog.get_logger(__name__)


class RegistrationService:
    def __init__(self, store: DocumentStore, policy: AdminPolicy, starting_rating: int = DEFAULT_RATING):
        self.store = store
        self.policy = policy
        self.starting_rating = starting_rating

    def register(
        self,
        tournament_id: int,
        user_id: int,
        username: Optional[str] = None,
        nickname: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> RegistrationModel:
        """
        Seats a user in a tournament.

        Capacity and duplicate checks run before the user profile is touched,
        so a rejected registration never provisions a user.
        """
        with self.store.transaction() as document:
            tournament = document.find_tournament(tournament_id)
            if tournament is None:
                raise NotFoundError("Tournament not found.")
            if tournament.status == TournamentStatus.FINISHED:
                raise ConflictError("Tournament is closed.")
            if len(tournament.players) >= tournament.max_players:
                raise ConflictError("No seats left.")
            if document.find_registration(tournament_id, user_id) is not None:
                raise ConflictError("Already registered.")

            user = get_or_create_user(document, user_id, username, self.policy, self.starting_rating)
            apply_profile_changes(user, nickname=nickname, phone=phone)

            registration = RegistrationModel(
                id=document.new_registration_id(),
                tournament_id=tournament_id,
                user_id=user_id,
                username=username or "unknown",
                nickname=user.nickname,
                phone=user.phone,
            )
            document.registrations.append(registration)
            tournament.players.append(RosterEntry(user_id=user_id, nickname=user.nickname, phone=user.phone))

            logger.info(
                "registration_created",
                tournament_id=tournament_id,
                user_id=user_id,
                seats_left=tournament.seats_left,
            )
            return registration

    def cancel(self, tournament_id: int, user_id: int) -> bool:
        """Drops the registration and roster seat; returns whether anything was removed."""
        with self.store.transaction() as document:
            removed = False
            tournament = document.find_tournament(tournament_id)
            if tournament is not None and tournament.has_player(user_id):
                tournament.players = [p for p in tournament.players if p.user_id != user_id]
                removed = True

            remaining = [
                r for r in document.registrations
                if not (r.tournament_id == tournament_id and r.user_id == user_id)
            ]
            if len(remaining) != len(document.registrations):
                document.registrations = remaining
                removed = True

            if removed:
                logger.info("registration_cancelled", tournament_id=tournament_id, user_id=user_id)
            return removed

    def registrations_for(self, user_id: int) -> List[RegistrationModel]:
        return [r for r in self.store.load().registrations if r.user_id == user_id]

    def registrations_for_or_empty(self, user_id: int) -> List[RegistrationModel]:
        """Same as registrations_for, but an unreadable store yields an empty list."""
        try:
            return self.registrations_for(user_id)
        except StorageError as e:
            logger.warning("registrations_lookup_failed", user_id=user_id, error=str(e))
            return []
