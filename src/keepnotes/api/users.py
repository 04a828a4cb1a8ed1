"""User API endpoints."""

from fastapi import APIRouter, Depends

from ..core.schemas.auth import UserResponse, UserUpdateRequest
from ..core.schemas.common import MessageResponse
from ..core.services import UserService
from ..dependencies import get_user_service
from ..middleware.auth import get_current_identity
from ..middleware.errors import unwrap
from ..security.jwt import Identity

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    return unwrap(await user_service.get_user(identity, user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Change username and/or password."""
    return unwrap(await user_service.update_user(identity, user_id, request))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    user_service: UserService = Depends(get_user_service),
):
    """Delete the account with all of its notes and tags."""
    outcome = await user_service.delete_user(identity, user_id)
    unwrap(outcome)
    return MessageResponse(message=outcome.message, warning=outcome.warning)
