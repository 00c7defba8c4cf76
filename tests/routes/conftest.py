import pytest
from fastapi.testclient import TestClient

from poker_league.api.dependencies import get_admin_policy, get_store
from poker_league.main import app

ADMIN_HEADERS = {"X-User-Id": "1"}


@pytest.fixture
def client(store, policy):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_admin_policy] = lambda: policy
    yield TestClient(app)
    app.dependency_overrides = {}


@pytest.fixture
def create_tournament(client):
    def _create(**overrides):
        payload = {
            "title": "Friday Freeze",
            "date": "2024-05-17",
            "buyin": "$100 entry",
            "prize": "$1000",
            "maxPlayers": 2,
        }
        payload.update(overrides)
        response = client.post("/api/tournaments", json=payload, headers=ADMIN_HEADERS)
        assert response.status_code == 200
        return response.json()["tournament"]

    return _create
