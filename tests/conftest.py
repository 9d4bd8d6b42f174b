import pytest
from fastapi.testclient import TestClient

from retro.main import app, get_service
from retro.service import RetroService
from retro.storage import JsonStore


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path / "data.json")


@pytest.fixture
def service(store):
    return RetroService(store)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def board(service):
    """A board with two votable cards and one action item."""
    created = service.create_board("Sprint 1")
    service.replace_columns(
        created["id"],
        {
            "went-well": [{"cardId": "w1", "text": "deploys", "author": "a@x.com", "votes": {}}],
            "to-improve": [{"cardId": "t1", "text": "flaky tests", "author": "b@x.com", "votes": {}}],
            "action-items": [{"cardId": "a1", "text": "fix CI", "author": "a@x.com", "votes": {}}],
        },
    )
    return created
