# Base record for everything kept in the in-memory collections
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class Record(BaseModel):
    """Common base for all stored rows.

    Attributes are snake_case in Python and camelCase on the wire and on disk
    (``userId``, ``createdAt``...), so the persisted JSON keeps the field names
    clients see.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_dict(self) -> dict:
        """Convert to a JSON-ready dict using the public field names."""
        return self.model_dump(mode="json", by_alias=True)


class OwnedRecord(Record):
    """Row scoped to a single user."""

    id: str = Field(default_factory=new_id)
    user_id: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id}, user_id={self.user_id})>"
