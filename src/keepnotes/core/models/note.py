# Note row
from typing import List

from pydantic import Field, field_validator

from .base import OwnedRecord


class Note(OwnedRecord):
    """A note. ``tag_ids`` are weak references to the owner's tags."""

    title: str = ""
    content: str = ""
    tag_ids: List[str] = Field(default_factory=list)
    archived: bool = False
    color: str = "#ffffff"

    @field_validator("tag_ids")
    @classmethod
    def dedupe_tag_ids(cls, v: List[str]) -> List[str]:
        # ordered set: first occurrence wins
        return list(dict.fromkeys(v))

    def has_tag(self, tag_id: str) -> bool:
        return tag_id in self.tag_ids
