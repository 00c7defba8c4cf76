import time
from typing import Dict, Iterable, List, Optional

from pydantic import Field

from poker_league.models.base_model import CamelModel
from poker_league.models.registration_model import RegistrationModel
from poker_league.models.tournament_model import TournamentModel
from poker_league.models.user_model import UserModel


def next_id(existing_ids: Iterable[int]) -> int:
    """Millisecond timestamp, bumped past the largest id already in use."""
    candidate = int(time.time() * 1000)
    highest = max(existing_ids, default=0)
    return candidate if candidate > highest else highest + 1


class DocumentModel(CamelModel):
    """The whole database: one JSON object with three collections."""

    version: int = 0
    tournaments: List[TournamentModel] = Field(default_factory=list)
    registrations: List[RegistrationModel] = Field(default_factory=list)
    users: Dict[int, UserModel] = Field(default_factory=dict)

    def find_tournament(self, tournament_id: int) -> Optional[TournamentModel]:
        return next((t for t in self.tournaments if t.id == tournament_id), None)

    def find_registration(self, tournament_id: int, user_id: int) -> Optional[RegistrationModel]:
        return next(
            (r for r in self.registrations if r.tournament_id == tournament_id and r.user_id == user_id),
            None,
        )

    def new_tournament_id(self) -> int:
        return next_id(t.id for t in self.tournaments)

    def new_registration_id(self) -> int:
        return next_id(r.id for r in self.registrations)
