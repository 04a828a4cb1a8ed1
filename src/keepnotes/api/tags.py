"""Tags API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..core.schemas.common import MessageResponse
from ..core.schemas.tags import TagCreate, TagResponse, TagUpdate
from ..core.services import TagService
from ..dependencies import get_tag_service
from ..middleware.auth import get_current_identity
from ..middleware.errors import unwrap
from ..security.jwt import Identity

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=List[TagResponse])
async def list_tags(
    identity: Identity = Depends(get_current_identity),
    tag_service: TagService = Depends(get_tag_service),
):
    return unwrap(await tag_service.list_tags(identity.user_id))


@router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    request: TagCreate,
    identity: Identity = Depends(get_current_identity),
    tag_service: TagService = Depends(get_tag_service),
):
    return unwrap(await tag_service.create_tag(identity.user_id, request))


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(
    tag_id: str,
    identity: Identity = Depends(get_current_identity),
    tag_service: TagService = Depends(get_tag_service),
):
    return unwrap(await tag_service.get_tag(tag_id, identity.user_id))


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: str,
    request: TagUpdate,
    identity: Identity = Depends(get_current_identity),
    tag_service: TagService = Depends(get_tag_service),
):
    return unwrap(await tag_service.update_tag(tag_id, identity.user_id, request))


@router.delete("/{tag_id}", response_model=MessageResponse)
async def delete_tag(
    tag_id: str,
    identity: Identity = Depends(get_current_identity),
    tag_service: TagService = Depends(get_tag_service),
):
    """Delete a tag; notes keep existing but lose the reference."""
    outcome = await tag_service.delete_tag(tag_id, identity.user_id)
    unwrap(outcome)
    return MessageResponse(message=outcome.message, warning=outcome.warning)
