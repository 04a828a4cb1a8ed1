"""Password hashing utilities."""

import asyncio
import logging

from passlib.context import CryptContext
from passlib.exc import PasswordSizeError, UnknownHashError

from ..core.errors import HashingError, InvalidArgument

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted one-way password hashing.

    Uses bcrypt_sha256 to avoid bcrypt's 72-byte truncation issue on long
    passwords; it pre-hashes with SHA-256 before applying bcrypt.
    """

    def __init__(self, rounds: int = 12):
        self.context = CryptContext(
            schemes=["bcrypt_sha256"],
            deprecated="auto",
            bcrypt_sha256__default_rounds=rounds,
            # digests below the configured cost are flagged by needs_update
            bcrypt_sha256__min_rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        """Hash a password."""
        try:
            return self.context.hash(plaintext)
        except PasswordSizeError as e:
            raise InvalidArgument("Password is too long") from e
        except (ValueError, TypeError, RuntimeError, MemoryError) as e:
            logger.error(f"Password hashing failed: {e}")
            raise HashingError() from e

    def verify(self, plaintext: str, digest: str) -> bool:
        """Verify a password against its hash. Mismatch is False, never an error."""
        try:
            return self.context.verify(plaintext, digest)
        except (UnknownHashError, ValueError, TypeError):
            return False

    def needs_update(self, digest: str) -> bool:
        """Check if password hash needs updating."""
        try:
            return self.context.needs_update(digest)
        except (UnknownHashError, ValueError):
            return True

    # bcrypt is slow on purpose, keep it off the event loop
    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, plaintext: str, digest: str) -> bool:
        return await asyncio.to_thread(self.verify, plaintext, digest)
