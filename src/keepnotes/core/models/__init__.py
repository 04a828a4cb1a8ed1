"""
In-memory records for the Keep Notes core.

These pydantic models are the rows held by the stores and written to the
snapshot files:
    - User: account with hashed password
    - Note: owner-scoped note with weak tag references
    - Tag: owner-scoped label
    - RevokedToken: revocation set entry
"""

from .base import OwnedRecord, Record, new_id, utcnow
from .note import Note
from .revoked_token import RevokedToken
from .tag import Tag
from .user import User

__all__ = [
    "Record",
    "OwnedRecord",
    "User",
    "Note",
    "Tag",
    "RevokedToken",
    "new_id",
    "utcnow",
]
