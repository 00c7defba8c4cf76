from typing import Iterable, Optional

from poker_league.core.errors import ForbiddenError


class AdminPolicy:
    """
    Allow-list of user ids permitted to run admin operations.

    Anyone who can state an admin id passes the check; there is no
    authentication behind it.
    """

    def __init__(self, admin_ids: Iterable[int] = ()):
        self.admin_ids = frozenset(int(admin_id) for admin_id in admin_ids)

    def is_admin(self, user_id: Optional[int]) -> bool:
        if user_id is None:
            return False
        return user_id in self.admin_ids

    def require_admin(self, user_id: Optional[int]) -> None:
        if not self.is_admin(user_id):
            raise ForbiddenError("Admin privileges required.")
