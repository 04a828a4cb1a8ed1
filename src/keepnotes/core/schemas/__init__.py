"""
Pydantic schemas for validating and documenting requests and responses.

Both façades use these models: the REST routers directly, the RPC handlers
after mapping their messages onto them.
"""

from .auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import NoteCreate, NoteFilter, NoteResponse, NoteUpdate
from .tags import TagCreate, TagResponse, TagUpdate

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "AuthResponse",
    "UserResponse",
    "UserUpdateRequest",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteFilter",
    "NoteResponse",
    # Tag schemas
    "TagCreate",
    "TagUpdate",
    "TagResponse",
    # Common schemas
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
