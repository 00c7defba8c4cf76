import pytest

from poker_league.core.authorization import AdminPolicy
from poker_league.core.errors import NotFoundError
from poker_league.models.user_model import DEFAULT_NICKNAME
from poker_league.services.store import DocumentStore
from poker_league.services.user_service import UserService


class TestUserService:

    def test_get_or_create_new_user(self, user_service: UserService):
        user = user_service.get_or_create(42, "alice")

        assert user.id == 42
        assert user.username == "alice"
        assert user.nickname == "alice"
        assert user.phone == ""
        assert user.stats.rating == 1000
        assert user.stats.total_games == 0
        assert user.stats.wins == 0
        assert user.stats.cashes == 0
        assert user.stats.profit == 0
        assert user.history == []
        assert user.achievements == []
        assert user.is_admin is False

    def test_get_or_create_is_idempotent(self, user_service: UserService, store: DocumentStore):
        first = user_service.get_or_create(42, "alice")
        second = user_service.get_or_create(42, "alice")

        assert first.stats.rating == 1000
        assert second.stats.rating == 1000
        assert len(store.load().users) == 1

    def test_get_or_create_keeps_existing_profile(self, user_service: UserService):
        user_service.get_or_create(42, "alice")
        user_service.update_profile(42, nickname="Ace")

        again = user_service.get_or_create(42, "someone_else")
        assert again.nickname == "Ace"
        assert again.username == "alice"

    def test_placeholder_nickname_without_username(self, user_service: UserService):
        user = user_service.get_or_create(7)
        assert user.nickname == DEFAULT_NICKNAME

    def test_admin_flag_follows_policy(self, user_service: UserService):
        admin = user_service.get_or_create(1, "boss")
        assert admin.is_admin is True

    def test_admin_flag_refreshed_when_policy_changes(self, store: DocumentStore):
        UserService(store, AdminPolicy({99})).get_or_create(99, "former_admin")

        user = UserService(store, AdminPolicy()).get_or_create(99, "former_admin")
        assert user.is_admin is False

    def test_update_profile_applies_only_given_fields(self, user_service: UserService):
        user_service.get_or_create(42, "alice")
        user_service.update_profile(42, phone="+100200300")

        updated = user_service.update_profile(42, nickname="Queen")
        assert updated.nickname == "Queen"
        assert updated.phone == "+100200300"

    def test_update_profile_unknown_user(self, user_service: UserService):
        with pytest.raises(NotFoundError):
            user_service.update_profile(404, nickname="ghost")

    def test_get_stats(self, user_service: UserService):
        user_service.get_or_create(42, "alice")
        stats = user_service.get_stats(42)

        assert stats["stats"].rating == 1000
        assert stats["history"] == []
        assert stats["achievements"] == []

    def test_get_stats_unknown_user(self, user_service: UserService):
        with pytest.raises(NotFoundError):
            user_service.get_stats(404)

    def test_check_admin(self, user_service: UserService):
        assert user_service.check_admin(1) is True
        assert user_service.check_admin(2) is False

    def test_get_or_create_existing_user_does_not_rewrite_file(self, user_service: UserService, store: DocumentStore):
        user_service.get_or_create(42, "alice")
        version_before = store.load().version

        user = user_service.get_or_create(42, "alice")

        assert user.id == 42
        assert store.load().version == version_before
