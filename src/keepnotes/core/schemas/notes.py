"""
Note schemas.

Field names are camelCase on the wire (``tagIds``, ``userId``...); Python code
uses the snake_case attribute names.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoteCreate(CamelModel):
    """Note creation request schema."""

    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note content")
    tag_ids: List[str] = Field(default_factory=list, description="Ids of the owner's tags")
    color: Optional[str] = Field(default=None, description="Note color, server default if omitted")

    def fields(self) -> dict:
        """Fields to store; an omitted color falls back to the store default."""
        return self.model_dump(exclude_none=True)


class NoteUpdate(CamelModel):
    """Note update request schema. Only the fields sent are changed."""

    title: Optional[str] = None
    content: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    archived: Optional[bool] = None
    color: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class NoteFilter(CamelModel):
    """Optional filters for listing notes."""

    archived: Optional[bool] = None
    tag_id: Optional[str] = None

    def matches(self, note) -> bool:
        if self.archived is not None and note.archived != self.archived:
            return False
        if self.tag_id and not note.has_tag(self.tag_id):
            return False
        return True


class NoteResponse(CamelModel):
    """Note response schema."""

    id: str
    title: str
    content: str
    tag_ids: List[str]
    user_id: str
    created_at: datetime
    updated_at: datetime
    archived: bool
    color: str

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "9b2d1c7e-3f4a-4c55-9a77-1d2e3f4a5b6c",
                "title": "Groceries",
                "content": "milk, eggs",
                "tagIds": ["2f1e0d9c-8b7a-4655-9443-3c2b1a0f9e8d"],
                "userId": "123e4567-e89b-12d3-a456-426614174000",
                "createdAt": "2025-09-13T10:30:00Z",
                "updatedAt": "2025-09-13T11:00:00Z",
                "archived": False,
                "color": "#ffffff",
            }
        },
    )
