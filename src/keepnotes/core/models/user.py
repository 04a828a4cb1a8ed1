"""
User row owned by the credential store.
"""

from datetime import datetime

from pydantic import Field

from .base import Record, new_id, utcnow


class User(Record):
    """User account with a hashed password.

    ``password`` holds the digest, never the plaintext, and is dropped from
    every public view.
    """

    id: str = Field(default_factory=new_id)
    username: str
    password: str = Field(repr=False)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"

    def public(self) -> dict:
        """User fields safe to hand to a caller."""
        return {"id": self.id, "username": self.username}
