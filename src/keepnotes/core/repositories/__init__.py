"""Repository layer: the in-memory collections."""

from .entity_repository import EntityStore
from .user_repository import CredentialStore

__all__ = [
    "CredentialStore",
    "EntityStore",
]
