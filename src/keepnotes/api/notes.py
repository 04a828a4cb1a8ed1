"""Notes API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import NoteCreate, NoteFilter, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..dependencies import get_note_service
from ..middleware.auth import get_current_identity
from ..middleware.errors import unwrap
from ..security.jwt import Identity

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("/", response_model=List[NoteResponse])
async def list_notes(
    archived: Optional[bool] = Query(None),
    tag_id: Optional[str] = Query(None, alias="tagId"),
    identity: Identity = Depends(get_current_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """List the caller's notes, optionally by archived flag and tag."""
    filters = NoteFilter(archived=archived, tag_id=tag_id)
    return unwrap(await note_service.list_notes(identity.user_id, filters))


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    identity: Identity = Depends(get_current_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return unwrap(await note_service.create_note(identity.user_id, request))


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: str,
    identity: Identity = Depends(get_current_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """Get a specific note."""
    return unwrap(await note_service.get_note(note_id, identity.user_id))


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    request: NoteUpdate,
    identity: Identity = Depends(get_current_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note. Fields left out keep their value."""
    return unwrap(await note_service.update_note(note_id, identity.user_id, request))


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    identity: Identity = Depends(get_current_identity),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note."""
    outcome = await note_service.delete_note(note_id, identity.user_id)
    unwrap(outcome)
    return MessageResponse(message=outcome.message, warning=outcome.warning)
