"""Credential store: the users collection."""

from datetime import datetime, timedelta
from typing import Callable, Dict, Iterable, List, Optional

from ...security.password import PasswordHasher
from ..errors import DuplicateUsername, InvalidArgument, InvalidCredentials, NotFound
from ..models import User, utcnow


class CredentialStore:
    """Owns every User row and enforces unique usernames.

    Lookups by username are exact and case-sensitive. Deleting a user here does
    not touch notes or tags; the coordinator handles that cascade.
    """

    def __init__(self, hasher: PasswordHasher, clock: Callable[[], datetime] = utcnow):
        self.hasher = hasher
        self.clock = clock
        self._users: Dict[str, User] = {}

    async def register(self, username: str, plaintext: str) -> User:
        """Create a user with a hashed password."""
        if not username:
            raise InvalidArgument("Username is required")
        if not plaintext:
            raise InvalidArgument("Password is required")
        if self.is_username_taken(username):
            raise DuplicateUsername()

        digest = await self.hasher.hash_async(plaintext)

        now = self.clock()
        user = User(username=username, password=digest, created_at=now, updated_at=now)
        self._users[user.id] = user
        return user

    async def authenticate(self, username: str, plaintext: str) -> User:
        """Return the user for a matching username/password pair.

        A digest made with a lower cost than configured is replaced on the way.
        """
        user = self.get_by_username(username)
        if user is None:
            raise InvalidCredentials()
        if not await self.hasher.verify_async(plaintext, user.password):
            raise InvalidCredentials()

        if self.hasher.needs_update(user.password):
            # cost factor was raised since this digest was made
            digest = await self.hasher.hash_async(plaintext)
            user = user.model_copy(update={"password": digest})
            self._users[user.id] = user
        return user

    async def update_profile(
        self,
        user_id: str,
        new_username: Optional[str] = None,
        new_plaintext: Optional[str] = None,
    ) -> User:
        """Change username and/or password; empty values leave the field alone."""
        user = self.get(user_id)

        if new_username and new_username != user.username:
            if self.is_username_taken(new_username):
                raise DuplicateUsername()

        changes = {}
        if new_username:
            changes["username"] = new_username
        if new_plaintext:
            changes["password"] = await self.hasher.hash_async(new_plaintext)

        changes["updated_at"] = self._next_timestamp(user.updated_at)
        updated = user.model_copy(update=changes)
        self._users[user_id] = updated
        return updated

    def delete(self, user_id: str) -> None:
        """Remove the user row."""
        if self._users.pop(user_id, None) is None:
            raise NotFound.of("User")

    def get(self, user_id: str) -> User:
        """Get user by ID."""
        user = self._users.get(user_id)
        if user is None:
            raise NotFound.of("User")
        return user

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        for user in self._users.values():
            if user.username == username:
                return user
        return None

    def is_username_taken(self, username: str) -> bool:
        """Check if username exists."""
        return self.get_by_username(username) is not None

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)

    def snapshot(self) -> List[User]:
        return list(self._users.values())

    def load(self, users: Iterable[User]) -> None:
        self._users = {user.id: user for user in users}

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self.clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now
