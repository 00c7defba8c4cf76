from typing import Any, List, Optional

from pydantic import ConfigDict

from poker_league.models.base_model import CamelModel
from poker_league.models.user_model import HistoryEntry, UserStats


class ProfileUpdate(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    nickname: Optional[str] = None
    phone: Optional[str] = None


class UserStatsResponse(CamelModel):
    stats: UserStats
    history: List[HistoryEntry]
    achievements: List[Any]


class AdminCheckResponse(CamelModel):
    is_admin: bool
