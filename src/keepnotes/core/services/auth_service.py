"""Authentication service implementation."""

import logging

from ...security.jwt import Identity, TokenReason
from ..coordinator import ConsistencyCoordinator
from ..errors import ErrorKind
from ..outcome import Outcome, captures_errors
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .interfaces import IAuthService

logger = logging.getLogger(__name__)

_REASON_FAILURES = {
    TokenReason.EXPIRED: (ErrorKind.TOKEN_EXPIRED, "Token has expired"),
    TokenReason.REVOKED: (ErrorKind.TOKEN_REVOKED, "Token has been revoked"),
    TokenReason.BAD_SIGNATURE: (ErrorKind.TOKEN_MALFORMED, "Invalid token"),
}


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, core: ConsistencyCoordinator):
        self.core = core

    @captures_errors
    async def register(self, request: RegisterRequest) -> Outcome[AuthResponse]:
        """Register new user."""
        async with self.core.mutation() as txn:
            user = await self.core.users.register(request.username, request.password)
            token = self.core.tokens.issue(user)

        logger.info(f"Registered user {user.id}")
        return Outcome.ok(
            "User registered successfully",
            AuthResponse(
                message="User registered successfully",
                token=token,
                user=UserResponse(**user.public()),
            ),
            warning=txn.warning,
        )

    @captures_errors
    async def login(self, request: LoginRequest) -> Outcome[AuthResponse]:
        """Login user and return a bearer token."""
        # a mutation: authenticate may upgrade the stored digest
        async with self.core.mutation() as txn:
            user = await self.core.users.authenticate(request.username, request.password)
            token = self.core.tokens.issue(user)

        return Outcome.ok(
            "Login successful",
            AuthResponse(message="Login successful", token=token, user=UserResponse(**user.public())),
            warning=txn.warning,
        )

    @captures_errors
    async def logout(self, token: str) -> Outcome:
        """Put the token on the revocation set."""
        async with self.core.mutation() as txn:
            self.core.tokens.revoke(token)

        return Outcome.ok("Logout successful", warning=txn.warning)

    async def authenticate(self, token: str) -> Outcome[Identity]:
        """Verify a bearer token and make sure its user still exists."""
        async with self.core.read():
            result = self.core.tokens.verify(token)
            if not result.valid:
                kind, message = _REASON_FAILURES[result.reason]
                return Outcome.fail(kind, message)

            identity = result.identity
            if identity.user_id not in self.core.users:
                # account deleted while the token was still live
                return Outcome.fail(ErrorKind.TOKEN_REVOKED, "Token owner no longer exists")

        return Outcome.ok("Token is valid", identity)
