from poker_league.models.user_model import UserModel, UserStats
from poker_league.services.leaderboard_service import LeaderboardService, rank_users
from poker_league.services.store import DocumentStore


def _user(user_id, rating):
    return UserModel(id=user_id, nickname=f"p{user_id}", stats=UserStats(rating=rating))


class TestRankUsers:

    def test_ties_keep_original_order(self):
        users = [_user(1, 900), _user(2, 1200), _user(3, 1200)]

        ranked = rank_users(users)

        assert [e.user_id for e in ranked] == [2, 3, 1]
        assert [e.rating for e in ranked] == [1200, 1200, 900]
        assert [e.rank for e in ranked] == [1, 2, 3]

    def test_truncates_to_limit(self):
        users = [_user(i, 1000 + i) for i in range(10)]

        ranked = rank_users(users, limit=3)

        assert len(ranked) == 3
        assert [e.user_id for e in ranked] == [9, 8, 7]

    def test_empty(self):
        assert rank_users([]) == []


class TestLeaderboardService:

    def test_reads_users_in_document_order(self, store: DocumentStore):
        document = store.load()
        for user in (_user(5, 1200), _user(6, 1200), _user(7, 900)):
            document.users[user.id] = user
        store.save(document)

        board = LeaderboardService(store).top()

        assert [e.user_id for e in board] == [5, 6, 7]
        assert board[0].nickname == "p5"

    def test_default_limit_is_fifty(self, store: DocumentStore):
        document = store.load()
        for i in range(60):
            document.users[i] = _user(i, 1000)
        store.save(document)

        assert len(LeaderboardService(store).top()) == 50
        assert len(LeaderboardService(store).top(5)) == 5
