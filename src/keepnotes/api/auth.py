"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from ..core.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from ..core.schemas.common import MessageResponse
from ..core.services import AuthService
from ..dependencies import get_auth_service
from ..middleware.auth import get_bearer_token
from ..middleware.errors import unwrap

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Register a new user and get a bearer token."""
    return unwrap(await auth_service.register(request))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    """Login user and get a bearer token."""
    return unwrap(await auth_service.login(request))


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Revoke the bearer token used for this request."""
    outcome = await auth_service.logout(token)
    unwrap(outcome)
    return MessageResponse(message=outcome.message, warning=outcome.warning)
