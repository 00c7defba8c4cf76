from datetime import datetime, timezone
from enum import Enum
from typing import List

from pydantic import Field

from poker_league.models.base_model import CamelModel


class TournamentStatus(str, Enum):
    OPEN = "open"
    FINISHED = "finished"


class RosterEntry(CamelModel):
    user_id: int
    nickname: str
    phone: str = ""


class ResultEntry(CamelModel):
    user_id: int
    place: int = Field(ge=1)
    prize: int = 0


class TournamentModel(CamelModel):
    id: int
    title: str
    date: str
    buyin: str  # Display string, e.g. "$100 entry"
    prize: str
    max_players: int = Field(ge=1)
    players: List[RosterEntry] = Field(default_factory=list)
    status: TournamentStatus = TournamentStatus.OPEN
    results: List[ResultEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def seats_left(self) -> int:
        return max(self.max_players - len(self.players), 0)

    def has_player(self, user_id: int) -> bool:
        return any(player.user_id == user_id for player in self.players)
