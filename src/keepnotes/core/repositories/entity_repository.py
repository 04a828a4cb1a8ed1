"""Owner-scoped store used for notes and tags."""

import logging
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from ..errors import InvalidArgument, NotFound
from ..models import OwnedRecord, new_id, utcnow

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=OwnedRecord)

# never changed through update()
IMMUTABLE_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})


class EntityStore(Generic[E]):
    """Collection of owner-scoped rows of one type.

    Every lookup takes the owner id. A row owned by someone else is reported
    exactly like a missing one, so callers can't probe other tenants.
    """

    def __init__(
        self,
        model: Type[E],
        defaults: Optional[Mapping[str, Any]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.model = model
        self.label = model.__name__
        self.defaults = dict(defaults or {})
        self.clock = clock
        self._rows: Dict[str, E] = {}

    def create(self, owner_id: str, fields: Optional[Mapping[str, Any]] = None) -> E:
        """Create a row with a fresh id; createdAt == updatedAt."""
        data = {**self.defaults, **self._settable(fields or {})}
        now = self.clock()
        entity = self.model(
            id=new_id(), user_id=owner_id, created_at=now, updated_at=now, **data
        )
        self._rows[entity.id] = entity
        return entity

    def get(self, entity_id: str, owner_id: str) -> E:
        """Get row by ID if owned by ``owner_id``."""
        entity = self._rows.get(entity_id)
        if entity is None or entity.user_id != owner_id:
            raise NotFound.of(self.label)
        return entity

    def list(self, owner_id: str, predicate: Optional[Callable[[E], bool]] = None) -> List[E]:
        """All rows of ``owner_id`` matching ``predicate``, in insertion order."""
        return [
            entity
            for entity in self._rows.values()
            if entity.user_id == owner_id and (predicate is None or predicate(entity))
        ]

    def update(
        self,
        entity_id: str,
        owner_id: str,
        changes: Mapping[str, Any],
        touch: bool = True,
    ) -> E:
        """Apply only the supplied fields.

        ``updated_at`` always moves forward unless ``touch`` is False, which the
        cascades use for housekeeping rewrites.
        """
        current = self.get(entity_id, owner_id)
        data = current.model_dump()
        data.update(self._settable(changes))
        if touch:
            data["updated_at"] = self._next_timestamp(current.updated_at)
        updated = self.model.model_validate(data)
        self._rows[entity_id] = updated
        return updated

    def delete(self, entity_id: str, owner_id: str) -> None:
        """Delete row if owned by ``owner_id``."""
        self.get(entity_id, owner_id)
        del self._rows[entity_id]

    def delete_owned(self, owner_id: str) -> int:
        """Remove every row of ``owner_id``; returns how many went."""
        doomed = [eid for eid, entity in self._rows.items() if entity.user_id == owner_id]
        for eid in doomed:
            del self._rows[eid]
        if doomed:
            logger.debug(f"Removed {len(doomed)} {self.label} rows of user {owner_id}")
        return len(doomed)

    def __len__(self) -> int:
        return len(self._rows)

    def snapshot(self) -> List[E]:
        return list(self._rows.values())

    def load(self, rows: Iterable[E]) -> None:
        self._rows = {row.id: row for row in rows}

    def _settable(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = set(fields) - set(self.model.model_fields)
        if unknown:
            raise InvalidArgument(f"Unknown {self.label} fields: {', '.join(sorted(unknown))}")
        return {k: v for k, v in fields.items() if k not in IMMUTABLE_FIELDS}

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self.clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now
