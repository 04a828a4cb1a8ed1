"""
Service layer interfaces and implementations.

Services are the boundary of the core: they return ``Outcome`` values and are
shared by the REST and RPC façades.
"""

from .interfaces import (
    IAuthService,
    IHealthService,
    INoteService,
    ITagService,
    IUserService,
)

from .auth_service import AuthService
from .health_service import HealthService
from .note_service import NoteService
from .tag_service import TagService
from .user_service import UserService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ITagService",
    "IUserService",
    "IHealthService",

    # Implementations
    "AuthService",
    "NoteService",
    "TagService",
    "UserService",
    "HealthService",
]
