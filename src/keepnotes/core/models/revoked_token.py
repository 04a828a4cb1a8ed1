"""Revocation set entry."""

from datetime import datetime

from .base import Record


class RevokedToken(Record):
    """A bearer token invalidated before its natural expiry.

    Kept only until ``expires_at``; after that the token fails on expiry alone.
    """

    token: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
