"""Authentication middleware."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.errors import ErrorKind
from ..core.services import AuthService
from ..dependencies import get_auth_service
from ..security.jwt import Identity
from .errors import OutcomeFailure, unwrap


class JWTBearer(HTTPBearer):
    """Bearer token authentication backed by the token authority."""

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(
        self, request: Request, auth_service: AuthService = Depends(get_auth_service)
    ) -> Identity:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials or not credentials.credentials:
            raise OutcomeFailure(ErrorKind.TOKEN_MALFORMED, "Authentication required")
        if credentials.scheme.lower() != "bearer":
            raise OutcomeFailure(ErrorKind.TOKEN_MALFORMED, "Invalid authentication scheme")

        identity = unwrap(await auth_service.authenticate(credentials.credentials))
        request.state.token = credentials.credentials
        return identity


# Dependency for getting the verified caller
async def get_current_identity(identity: Identity = Depends(JWTBearer())) -> Identity:
    """Get current authenticated identity."""
    return identity


def get_bearer_token(request: Request, identity: Identity = Depends(get_current_identity)) -> str:
    """Raw token of an authenticated request (used by logout)."""
    return request.state.token
