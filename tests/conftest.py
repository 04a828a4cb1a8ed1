"""Shared pytest fixtures: a fresh core on a temporary data directory per test."""

import logging
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from keepnotes.config import Settings, get_settings
from keepnotes.core.coordinator import ConsistencyCoordinator
from keepnotes.dependencies import get_core
from keepnotes.main import app

# bcrypt at full cost would dominate the run time
TEST_HASH_ROUNDS = 4

# passlib is chatty about backend detection
logging.getLogger("passlib").setLevel(logging.ERROR)


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing the snapshot at a per-test directory."""
    return Settings(
        data_dir=str(tmp_path / "data"),
        secret_key="test-secret-key",
        password_hash_rounds=TEST_HASH_ROUNDS,
        debug=True,
    )


@pytest.fixture
def core(test_settings) -> ConsistencyCoordinator:
    """Coordinator with empty collections, backed by ``tmp_path``."""
    return ConsistencyCoordinator.open(test_settings)


@pytest.fixture
def test_app(core, test_settings):
    """The FastAPI app wired to the test core."""
    app.dependency_overrides[get_core] = lambda: core
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Test client; the lifespan (purge loop) is not started."""
    return TestClient(test_app)


@pytest.fixture
def register(client):
    """Register a user over REST and return the response body."""

    def _register(username=None, password="pw1"):
        username = username or f"user_{uuid4().hex[:8]}"
        resp = client.post("/api/auth/register", json={"username": username, "password": password})
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _register


@pytest.fixture
def alice(register):
    return register("alice", "pw1")


@pytest.fixture
def auth_headers(alice):
    """Authorization header for alice."""
    return {"Authorization": f"Bearer {alice['token']}"}
