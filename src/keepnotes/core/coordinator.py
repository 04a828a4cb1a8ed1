"""
Consistency coordinator: the one place that touches more than one collection.

It owns the dispatcher lock, the cascades (tag delete, user delete) and the
write-through to the snapshot gateway.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import AsyncIterator, Optional

from ..config import Settings
from ..security.jwt import TokenAuthority
from ..security.password import PasswordHasher
from .errors import PersistenceError
from .models import Note, Tag
from .persistence import Snapshot, SnapshotGateway
from .repositories import CredentialStore, EntityStore

logger = logging.getLogger(__name__)


@dataclass
class WriteThrough:
    """Result of persisting one mutation."""

    persisted: bool = False
    warning: Optional[str] = None


@dataclass
class CascadeResult:
    notes_removed: int = 0
    tags_removed: int = 0
    notes_rewritten: int = 0
    warning: Optional[str] = None


class ConsistencyCoordinator:
    """Top of the core.

    Every read and write runs under one ``asyncio.Lock``; the collections are
    not synchronized on their own. Mutations rewrite the full snapshot once on
    success. A failed write is logged and reported as a warning; the in-memory
    change stays.
    """

    def __init__(
        self,
        users: CredentialStore,
        notes: EntityStore[Note],
        tags: EntityStore[Tag],
        tokens: TokenAuthority,
        gateway: SnapshotGateway,
    ):
        self.users = users
        self.notes = notes
        self.tags = tags
        self.tokens = tokens
        self.gateway = gateway
        self._lock = asyncio.Lock()

    @classmethod
    def open(cls, settings: Settings) -> "ConsistencyCoordinator":
        """Build the stores from settings and load the snapshot once."""
        hasher = PasswordHasher(rounds=settings.password_hash_rounds)
        core = cls(
            users=CredentialStore(hasher),
            notes=EntityStore(Note, defaults={"color": settings.default_note_color}),
            tags=EntityStore(Tag),
            tokens=TokenAuthority(
                secret_key=settings.secret_key,
                algorithm=settings.algorithm,
                lifetime=timedelta(hours=settings.access_token_expire_hours),
            ),
            gateway=SnapshotGateway(settings.data_dir),
        )
        core.restore(core.gateway.load())
        return core

    def restore(self, snapshot: Snapshot) -> None:
        self.users.load(snapshot.users)
        self.notes.load(snapshot.notes)
        self.tags.load(snapshot.tags)
        self.tokens.load(snapshot.revocations)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            users=self.users.snapshot(),
            notes=self.notes.snapshot(),
            tags=self.tags.snapshot(),
            revocations=self.tokens.snapshot(),
        )

    @asynccontextmanager
    async def read(self) -> AsyncIterator["ConsistencyCoordinator"]:
        async with self._lock:
            yield self

    @asynccontextmanager
    async def mutation(self) -> AsyncIterator[WriteThrough]:
        """Serialize a mutation and persist it if the block finishes cleanly.

        An exception inside the block skips the write and propagates; callers
        must raise before changing anything.
        """
        async with self._lock:
            result = WriteThrough()
            yield result
            result.warning = self._persist()
            result.persisted = result.warning is None

    async def delete_tag_cascading(self, tag_id: str, owner_id: str) -> CascadeResult:
        """Delete a tag and strip its id from the owner's notes."""
        async with self.mutation() as txn:
            self.tags.delete(tag_id, owner_id)

            rewritten = 0
            for note in self.notes.list(owner_id, lambda n: n.has_tag(tag_id)):
                remaining = [t for t in note.tag_ids if t != tag_id]
                self.notes.update(note.id, owner_id, {"tag_ids": remaining}, touch=False)
                rewritten += 1

        logger.info(
            "Tag deleted",
            extra={"tag_id": tag_id, "user_id": owner_id, "notes_rewritten": rewritten},
        )
        return CascadeResult(tags_removed=1, notes_rewritten=rewritten, warning=txn.warning)

    async def delete_user_cascading(self, user_id: str) -> CascadeResult:
        """Delete a user's notes, then tags, then the user row."""
        async with self.mutation() as txn:
            # check first so a missing user changes nothing
            self.users.get(user_id)
            # dependents go before the owner row
            notes_removed = self.notes.delete_owned(user_id)
            tags_removed = self.tags.delete_owned(user_id)
            self.users.delete(user_id)

        logger.info(
            "User deleted",
            extra={"user_id": user_id, "notes_removed": notes_removed, "tags_removed": tags_removed},
        )
        return CascadeResult(
            notes_removed=notes_removed, tags_removed=tags_removed, warning=txn.warning
        )

    async def purge_revocations(self, now: Optional[datetime] = None) -> int:
        """Drop expired revocations under the dispatcher lock."""
        async with self._lock:
            removed = self.tokens.purge_expired(now)
            if removed:
                self._persist()
        return removed

    async def run_purge_loop(self, interval_seconds: float) -> None:
        """Purge expired revocations every ``interval_seconds`` until cancelled."""
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.purge_revocations()
            except Exception:
                logger.exception("Revocation purge failed")

    def _persist(self) -> Optional[str]:
        try:
            self.gateway.save(self.snapshot())
        except PersistenceError as e:
            logger.error("Snapshot write failed, keeping in-memory state", exc_info=e)
            return e.message
        return None
