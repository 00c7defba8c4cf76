import pytest

from poker_league.core.authorization import AdminPolicy
from poker_league.schemas.tournament_schemas import TournamentCreate
from poker_league.services.leaderboard_service import LeaderboardService
from poker_league.services.registration_service import RegistrationService
from poker_league.services.results_service import ResultsService
from poker_league.services.store import DocumentStore
from poker_league.services.tournament_service import TournamentService
from poker_league.services.user_service import UserService

ADMIN_ID = 1
TEST_DATA_FILE = "test_data.json"


@pytest.fixture
def temp_data_file(tmp_path):
    return tmp_path / TEST_DATA_FILE


@pytest.fixture
def store(temp_data_file):
    return DocumentStore(data_file_path=str(temp_data_file))


@pytest.fixture
def policy():
    return AdminPolicy({ADMIN_ID})


@pytest.fixture
def tournament_service(store, policy):
    return TournamentService(store, policy)


@pytest.fixture
def registration_service(store, policy):
    return RegistrationService(store, policy)


@pytest.fixture
def results_service(store, policy):
    return ResultsService(store, policy)


@pytest.fixture
def user_service(store, policy):
    return UserService(store, policy)


@pytest.fixture
def leaderboard_service(store):
    return LeaderboardService(store)


@pytest.fixture
def make_tournament(tournament_service):
    def _make(title="Friday Freeze", max_players=2, buyin="$100 entry", **kwargs):
        data = TournamentCreate(
            title=title,
            date="2024-05-17",
            buyin=buyin,
            prize="Winner takes it all",
            max_players=max_players,
            **kwargs,
        )
        return tournament_service.create_tournament(ADMIN_ID, data)

    return _make
