from datetime import datetime, timezone

from pydantic import Field

from poker_league.models.base_model import CamelModel


class RegistrationModel(CamelModel):
    id: int
    tournament_id: int
    user_id: int
    username: str = "unknown"
    nickname: str
    phone: str = ""
    registered_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
