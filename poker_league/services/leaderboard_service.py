from typing import List, Optional

from poker_league.models.base_model import CamelModel
from poker_league.models.user_model import UserModel
from poker_league.services.store import DocumentStore

DEFAULT_LIMIT = 50


class LeaderboardEntry(CamelModel):
    rank: int
    user_id: int
    nickname: str
    rating: int
    total_games: int
    wins: int


def rank_users(users: List[UserModel], limit: int = DEFAULT_LIMIT) -> List[LeaderboardEntry]:
    # sorted() is stable, so equal ratings keep the document's insertion order.
    ordered = sorted(users, key=lambda u: u.stats.rating, reverse=True)[:max(limit, 0)]
    return [
        LeaderboardEntry(
            rank=position,
            user_id=user.id,
            nickname=user.nickname,
            rating=user.stats.rating,
            total_games=user.stats.total_games,
            wins=user.stats.wins,
        )
        for position, user in enumerate(ordered, start=1)
    ]


class LeaderboardService:
    def __init__(self, store: DocumentStore, default_limit: int = DEFAULT_LIMIT):
        self.store = store
        self.default_limit = default_limit

    def top(self, limit: Optional[int] = None) -> List[LeaderboardEntry]:
        if limit is None:
            limit = self.default_limit
        return rank_users(list(self.store.load().users.values()), limit)
