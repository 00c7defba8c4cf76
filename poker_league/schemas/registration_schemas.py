from typing import Optional

from pydantic import ConfigDict

from poker_league.models.base_model import CamelModel


class RegistrationRequest(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    tournament_id: int
    user_id: int
    username: Optional[str] = None
    nickname: Optional[str] = None
    phone: Optional[str] = None


class CancelRequest(CamelModel):
    tournament_id: int
    user_id: int


class SuccessResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
