"""REST routers for Keep Notes."""

from .auth import router as auth_router
from .health import router as health_router
from .notes import router as notes_router
from .tags import router as tags_router
from .users import router as users_router

__all__ = ["auth_router", "notes_router", "tags_router", "users_router", "health_router"]
