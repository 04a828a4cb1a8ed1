"""User service implementation."""

import logging

from ...security.jwt import Identity
from ..coordinator import ConsistencyCoordinator
from ..errors import NotFound
from ..outcome import Outcome, captures_errors
from ..schemas.auth import UserResponse, UserUpdateRequest
from .interfaces import IUserService

logger = logging.getLogger(__name__)


class UserService(IUserService):
    """User service implementation.

    A caller can only see and change their own account; any other id is
    reported as not found.
    """

    def __init__(self, core: ConsistencyCoordinator):
        self.core = core

    @captures_errors
    async def get_user(self, caller: Identity, user_id: str) -> Outcome[UserResponse]:
        self._check_self(caller, user_id)
        async with self.core.read():
            user = self.core.users.get(user_id)
        return Outcome.ok("User retrieved successfully", UserResponse(**user.public()))

    @captures_errors
    async def update_user(
        self, caller: Identity, user_id: str, request: UserUpdateRequest
    ) -> Outcome[UserResponse]:
        self._check_self(caller, user_id)
        async with self.core.mutation() as txn:
            user = await self.core.users.update_profile(
                user_id, new_username=request.username, new_plaintext=request.password
            )
        return Outcome.ok(
            "User updated successfully", UserResponse(**user.public()), warning=txn.warning
        )

    @captures_errors
    async def delete_user(self, caller: Identity, user_id: str) -> Outcome:
        self._check_self(caller, user_id)
        result = await self.core.delete_user_cascading(user_id)
        return Outcome.ok("User deleted successfully", warning=result.warning)

    @staticmethod
    def _check_self(caller: Identity, user_id: str) -> None:
        if caller.user_id != user_id:
            logger.warning(f"User {caller.user_id} asked for account {user_id}")
            raise NotFound.of("User")
