"""Unit tests for middleware auth (keepnotes/middleware/auth.py)."""

from typing import Optional

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from keepnotes.core.errors import ErrorKind
from keepnotes.core.models import utcnow
from keepnotes.core.outcome import Outcome
from keepnotes.core.services import AuthService
from keepnotes.dependencies import get_auth_service
from keepnotes.middleware.auth import JWTBearer, get_bearer_token, get_current_identity
from keepnotes.middleware.errors import OutcomeFailure, outcome_failure_handler
from keepnotes.security.jwt import Identity


class FakeAuthService:
    def __init__(self, outcome: Outcome):
        self.outcome = outcome
        self.seen = []

    async def authenticate(self, token):
        self.seen.append(token)
        return self.outcome


def build_app(auth_service) -> FastAPI:
    app = FastAPI()
    app.add_exception_handler(OutcomeFailure, outcome_failure_handler)
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    @app.get("/protected")
    async def protected(identity: Identity = Depends(JWTBearer())):
        return {"user_id": identity.user_id}

    @app.get("/me")
    async def me(identity: Identity = Depends(get_current_identity), token: str = Depends(get_bearer_token)):
        return {"user_id": identity.user_id, "token": token}

    return app


def _make_bearer(token: Optional[str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"} if token is not None else {}


@pytest.fixture
def identity():
    return Identity(user_id="u-1", username="alice", expires_at=utcnow())


def test_jwtbearer_accepts_valid_token(identity):
    service = FakeAuthService(Outcome.ok("Token is valid", identity))
    client = TestClient(build_app(service))

    resp = client.get("/protected", headers=_make_bearer("valid-token"))

    assert resp.status_code == 200
    assert resp.json() == {"user_id": "u-1"}
    assert service.seen == ["valid-token"]


def test_jwtbearer_rejects_missing_header(identity):
    client = TestClient(build_app(FakeAuthService(Outcome.ok("ok", identity))))
    resp = client.get("/protected")
    assert resp.status_code == 401
    assert resp.json()["error"] == "TokenMalformed"
    assert resp.headers["www-authenticate"] == "Bearer"


def test_jwtbearer_rejects_other_scheme(identity):
    client = TestClient(build_app(FakeAuthService(Outcome.ok("ok", identity))))
    resp = client.get("/protected", headers={"Authorization": "Basic abc"})
    assert resp.status_code == 401


@pytest.mark.parametrize(
    "kind,message",
    [
        (ErrorKind.TOKEN_EXPIRED, "Token has expired"),
        (ErrorKind.TOKEN_REVOKED, "Token has been revoked"),
        (ErrorKind.TOKEN_MALFORMED, "Invalid token"),
    ],
)
def test_jwtbearer_reports_verification_failure(kind, message):
    client = TestClient(build_app(FakeAuthService(Outcome.fail(kind, message))))
    resp = client.get("/protected", headers=_make_bearer("t"))
    assert resp.status_code == 401
    assert resp.json()["error"] == kind.value
    assert resp.json()["message"] == message


def test_bearer_token_is_exposed(identity):
    client = TestClient(build_app(FakeAuthService(Outcome.ok("ok", identity))))
    resp = client.get("/me", headers=_make_bearer("raw-token"))
    assert resp.json() == {"user_id": "u-1", "token": "raw-token"}


def test_real_auth_service_is_wired(core):
    assert isinstance(get_auth_service(core), AuthService)
