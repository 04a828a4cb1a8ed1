# Core wiring for the façades
from typing import Optional

from fastapi import Depends

from .config import Settings, get_settings
from .core.coordinator import ConsistencyCoordinator
from .core.services import AuthService, HealthService, NoteService, TagService, UserService

_core: Optional[ConsistencyCoordinator] = None


def get_core(settings: Settings = Depends(get_settings)) -> ConsistencyCoordinator:
    """Process-wide coordinator, built and loaded on first use."""
    global _core
    if _core is None:
        _core = ConsistencyCoordinator.open(settings)
    return _core


def get_auth_service(core: ConsistencyCoordinator = Depends(get_core)) -> AuthService:
    return AuthService(core)


def get_note_service(core: ConsistencyCoordinator = Depends(get_core)) -> NoteService:
    return NoteService(core)


def get_tag_service(core: ConsistencyCoordinator = Depends(get_core)) -> TagService:
    return TagService(core)


def get_user_service(core: ConsistencyCoordinator = Depends(get_core)) -> UserService:
    return UserService(core)


def get_health_service(core: ConsistencyCoordinator = Depends(get_core)) -> HealthService:
    return HealthService(core)
