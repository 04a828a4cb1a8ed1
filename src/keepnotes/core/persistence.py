"""Snapshot persistence for the four collections.

Each collection lives in its own JSON document inside ``data_dir``. Every write
rewrites all four files. A single file is replaced atomically, the set of four
is not: a crash between two files leaves a mixed snapshot on disk.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .errors import PersistenceError
from .models import Note, Record, RevokedToken, Tag, User

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

USERS_FILE = "users.json"
NOTES_FILE = "notes.json"
TAGS_FILE = "tags.json"
BLACKLIST_FILE = "blacklist.json"


class Snapshot(BaseModel):
    """Full copy of the working set."""

    users: List[User] = Field(default_factory=list)
    notes: List[Note] = Field(default_factory=list)
    tags: List[Tag] = Field(default_factory=list)
    revocations: List[RevokedToken] = Field(default_factory=list)


class SnapshotGateway:
    """Reads and rewrites the on-disk snapshot."""

    def __init__(self, data_dir: str | os.PathLike):
        self.data_dir = Path(data_dir)

    def load(self) -> Snapshot:
        """Read all collections; missing files count as empty."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create {self.data_dir}: {e}") from e
        snapshot = Snapshot(
            users=self._read(USERS_FILE, User),
            notes=self._read(NOTES_FILE, Note),
            tags=self._read(TAGS_FILE, Tag),
            revocations=self._read(BLACKLIST_FILE, RevokedToken),
        )
        logger.info(
            "Snapshot loaded",
            extra={
                "data_dir": str(self.data_dir),
                "users": len(snapshot.users),
                "notes": len(snapshot.notes),
                "tags": len(snapshot.tags),
                "revocations": len(snapshot.revocations),
            },
        )
        return snapshot

    def save(self, snapshot: Snapshot) -> None:
        """Rewrite all four files."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self._write(USERS_FILE, snapshot.users)
            self._write(NOTES_FILE, snapshot.notes)
            self._write(TAGS_FILE, snapshot.tags)
            self._write(BLACKLIST_FILE, snapshot.revocations)
        except OSError as e:
            raise PersistenceError(f"Error saving data: {e}") from e

    def is_writable(self) -> bool:
        return self.data_dir.is_dir() and os.access(self.data_dir, os.W_OK)

    def _read(self, name: str, model: Type[R]) -> List[R]:
        path = self.data_dir / name
        if not path.exists():
            return []
        try:
            raw = path.read_text(encoding="utf-8")
            if not raw.strip():
                return []
            return TypeAdapter(List[model]).validate_json(raw)
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.error(f"Error loading {path}", exc_info=e)
            raise PersistenceError(f"Error loading {name}: {e}") from e

    def _write(self, name: str, rows: List[Record]) -> None:
        payload: List[Any] = [row.to_dict() for row in rows]
        fd, tmp = tempfile.mkstemp(dir=self.data_dir, prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, indent=2, ensure_ascii=False)
            os.replace(tmp, self.data_dir / name)
        except OSError:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
