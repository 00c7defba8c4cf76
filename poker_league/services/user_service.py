from typing import Any, Dict, Optional

import structlog

from poker_league.core.authorization import AdminPolicy
from poker_league.core.errors import NotFoundError
from poker_league.models.document_model import DocumentModel
from poker_league.models.user_model import DEFAULT_NICKNAME, DEFAULT_RATING, UserModel, UserStats
from poker_league.services.store import DocumentStore

logger = structlog.get_logger(__name__)


def get_or_create_user(
    document: DocumentModel,
    user_id: int,
    username: Optional[str],
    policy: AdminPolicy,
    starting_rating: int = DEFAULT_RATING,
) -> UserModel:
    """
    Returns the user with this id, creating it inside the document if absent.

    Existing users are left alone apart from the cached is_admin flag, which
    always follows the current policy.
    """
    user = document.users.get(user_id)
    if user is None:
        user = UserModel(
            id=user_id,
            username=username,
            nickname=username or DEFAULT_NICKNAME,
            stats=UserStats(rating=starting_rating),
            is_admin=policy.is_admin(user_id),
        )
        document.users[user_id] = user
        logger.info("user_created", user_id=user_id, username=username)
    else:
        user.is_admin = policy.is_admin(user_id)
    return user


def apply_profile_changes(user: UserModel, nickname: Optional[str] = None, phone: Optional[str] = None) -> UserModel:
    if nickname is not None:
        user.nickname = nickname
    if phone is not None:
        user.phone = phone
    return user


class UserService:
    def __init__(self, store: DocumentStore, policy: AdminPolicy, starting_rating: int = DEFAULT_RATING):
        self.store = store
        self.policy = policy
        self.starting_rating = starting_rating

    def get_or_create(self, user_id: int, username: Optional[str] = None) -> UserModel:
        # Known users with an up-to-date admin flag are served without a write.
        existing = self.store.load().users.get(user_id)
        if existing is not None and existing.is_admin == self.policy.is_admin(user_id):
            return existing

        with self.store.transaction() as document:
            return get_or_create_user(document, user_id, username, self.policy, self.starting_rating)

    def get_user(self, user_id: int) -> Optional[UserModel]:
        user = self.store.load().users.get(user_id)
        if user is not None:
            user.is_admin = self.policy.is_admin(user_id)
        return user

    def update_profile(self, user_id: int, nickname: Optional[str] = None, phone: Optional[str] = None) -> UserModel:
        with self.store.transaction() as document:
            user = document.users.get(user_id)
            if user is None:
                raise NotFoundError(f"User {user_id} not found.")
            apply_profile_changes(user, nickname=nickname, phone=phone)
            user.is_admin = self.policy.is_admin(user_id)
            logger.info("profile_updated", user_id=user_id)
            return user

    def get_stats(self, user_id: int) -> Dict[str, Any]:
        user = self.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found.")
        return {
            "stats": user.stats,
            "history": user.history,
            "achievements": user.achievements,
        }

    def check_admin(self, user_id: int) -> bool:
        return self.policy.is_admin(user_id)
