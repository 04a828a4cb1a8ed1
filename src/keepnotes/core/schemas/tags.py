"""Tag schemas."""

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from .notes import CamelModel


class TagCreate(CamelModel):
    """Tag creation request schema."""

    name: str = Field(min_length=1, description="Tag name")


class TagUpdate(CamelModel):
    """Tag update request schema."""

    name: Optional[str] = Field(default=None, min_length=1, description="New tag name")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TagResponse(CamelModel):
    """Tag response schema."""

    id: str
    name: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
