from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import Field

from poker_league.models.base_model import CamelModel

DEFAULT_RATING = 1000
DEFAULT_NICKNAME = "Player"


class UserStats(CamelModel):
    total_games: int = 0
    wins: int = 0
    cashes: int = 0
    profit: int = 0
    rating: int = DEFAULT_RATING


class HistoryEntry(CamelModel):
    tournament_id: int
    tournament_name: str
    date: str
    place: int
    prize: int = 0
    buyin: int = 0


class UserModel(CamelModel):
    id: int
    username: Optional[str] = None
    nickname: str = DEFAULT_NICKNAME
    phone: str = ""
    stats: UserStats = Field(default_factory=UserStats)
    history: List[HistoryEntry] = Field(default_factory=list)
    achievements: List[Any] = Field(default_factory=list)
    # Cached projection of the admin allow-list, refreshed on every directory read.
    is_admin: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
