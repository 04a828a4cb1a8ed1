"""
Service interfaces for Keep Notes.

Every method returns an ``Outcome``; none of them raises a core error.
"""

from abc import ABC, abstractmethod
from typing import List

from ...security.jwt import Identity
from ..outcome import Outcome
from ..schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse, UserUpdateRequest
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteFilter, NoteResponse, NoteUpdate
from ..schemas.tags import TagCreate, TagResponse, TagUpdate


class IAuthService(ABC):
    """Registration, login and bearer token lifecycle."""

    @abstractmethod
    async def register(self, request: RegisterRequest) -> Outcome[AuthResponse]:
        """Register new user and issue a token."""

    @abstractmethod
    async def login(self, request: LoginRequest) -> Outcome[AuthResponse]:
        """Check credentials and issue a token."""

    @abstractmethod
    async def logout(self, token: str) -> Outcome:
        """Revoke a token."""

    @abstractmethod
    async def authenticate(self, token: str) -> Outcome[Identity]:
        """Resolve a bearer token to the identity it speaks for."""


class INoteService(ABC):
    """Owner-scoped note CRUD."""

    @abstractmethod
    async def list_notes(self, user_id: str, filters: NoteFilter) -> Outcome[List[NoteResponse]]:
        """List user notes."""

    @abstractmethod
    async def get_note(self, note_id: str, user_id: str) -> Outcome[NoteResponse]:
        """Get note by ID."""

    @abstractmethod
    async def create_note(self, user_id: str, request: NoteCreate) -> Outcome[NoteResponse]:
        """Create new note."""

    @abstractmethod
    async def update_note(self, note_id: str, user_id: str, request: NoteUpdate) -> Outcome[NoteResponse]:
        """Update existing note."""

    @abstractmethod
    async def delete_note(self, note_id: str, user_id: str) -> Outcome:
        """Delete note."""


class ITagService(ABC):
    """Owner-scoped tag CRUD."""

    @abstractmethod
    async def list_tags(self, user_id: str) -> Outcome[List[TagResponse]]:
        """List user tags."""

    @abstractmethod
    async def get_tag(self, tag_id: str, user_id: str) -> Outcome[TagResponse]:
        """Get tag by ID."""

    @abstractmethod
    async def create_tag(self, user_id: str, request: TagCreate) -> Outcome[TagResponse]:
        """Create new tag."""

    @abstractmethod
    async def update_tag(self, tag_id: str, user_id: str, request: TagUpdate) -> Outcome[TagResponse]:
        """Rename tag."""

    @abstractmethod
    async def delete_tag(self, tag_id: str, user_id: str) -> Outcome:
        """Delete tag and remove it from the owner's notes."""


class IUserService(ABC):
    """Profile management for the calling user."""

    @abstractmethod
    async def get_user(self, caller: Identity, user_id: str) -> Outcome[UserResponse]:
        """Get user by ID."""

    @abstractmethod
    async def update_user(self, caller: Identity, user_id: str, request: UserUpdateRequest) -> Outcome[UserResponse]:
        """Update username and/or password."""

    @abstractmethod
    async def delete_user(self, caller: Identity, user_id: str) -> Outcome:
        """Delete user with all notes and tags."""


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
