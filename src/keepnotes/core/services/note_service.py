"""Note service implementation."""

from typing import List

from ..coordinator import ConsistencyCoordinator
from ..outcome import Outcome, captures_errors
from ..schemas.notes import NoteCreate, NoteFilter, NoteResponse, NoteUpdate
from .interfaces import INoteService


class NoteService(INoteService):
    """Note service implementation.

    Tag ids on a note are stored as given; they are not checked against the
    owner's tags.
    """

    def __init__(self, core: ConsistencyCoordinator):
        self.core = core

    @captures_errors
    async def list_notes(self, user_id: str, filters: NoteFilter) -> Outcome[List[NoteResponse]]:
        async with self.core.read():
            notes = self.core.notes.list(user_id, filters.matches)
        return Outcome.ok(
            "Notes retrieved successfully",
            [NoteResponse.model_validate(note) for note in notes],
        )

    @captures_errors
    async def get_note(self, note_id: str, user_id: str) -> Outcome[NoteResponse]:
        async with self.core.read():
            note = self.core.notes.get(note_id, user_id)
        return Outcome.ok("Note retrieved successfully", NoteResponse.model_validate(note))

    @captures_errors
    async def create_note(self, user_id: str, request: NoteCreate) -> Outcome[NoteResponse]:
        async with self.core.mutation() as txn:
            note = self.core.notes.create(user_id, request.fields())
        return Outcome.ok(
            "Note created successfully", NoteResponse.model_validate(note), warning=txn.warning
        )

    @captures_errors
    async def update_note(self, note_id: str, user_id: str, request: NoteUpdate) -> Outcome[NoteResponse]:
        async with self.core.mutation() as txn:
            note = self.core.notes.update(note_id, user_id, request.changes())
        return Outcome.ok(
            "Note updated successfully", NoteResponse.model_validate(note), warning=txn.warning
        )

    @captures_errors
    async def delete_note(self, note_id: str, user_id: str) -> Outcome:
        async with self.core.mutation() as txn:
            self.core.notes.delete(note_id, user_id)
        return Outcome.ok("Note deleted successfully", warning=txn.warning)
