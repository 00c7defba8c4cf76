from typing import List, Optional

from pydantic import ConfigDict, Field

from poker_league.models.base_model import CamelModel
from poker_league.models.tournament_model import ResultEntry, TournamentModel, TournamentStatus


class TournamentBase(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: str = Field(min_length=1)
    date: str = Field(min_length=1)
    buyin: str = Field(min_length=1)
    prize: str = Field(min_length=1)
    max_players: int = Field(ge=1)


class TournamentCreate(TournamentBase):
    status: TournamentStatus = TournamentStatus.OPEN


class TournamentUpdate(CamelModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    title: Optional[str] = Field(default=None, min_length=1)
    date: Optional[str] = Field(default=None, min_length=1)
    buyin: Optional[str] = Field(default=None, min_length=1)
    prize: Optional[str] = Field(default=None, min_length=1)
    max_players: Optional[int] = Field(default=None, ge=1)
    status: Optional[TournamentStatus] = None


class ResultsSubmission(CamelModel):
    results: List[ResultEntry]


class TournamentResponse(CamelModel):
    success: bool = True
    tournament: TournamentModel
