"""Tag service implementation."""

from typing import List

from ..coordinator import ConsistencyCoordinator
from ..outcome import Outcome, captures_errors
from ..schemas.tags import TagCreate, TagResponse, TagUpdate
from .interfaces import ITagService


class TagService(ITagService):
    """Tag service implementation."""

    def __init__(self, core: ConsistencyCoordinator):
        self.core = core

    @captures_errors
    async def list_tags(self, user_id: str) -> Outcome[List[TagResponse]]:
        async with self.core.read():
            tags = self.core.tags.list(user_id)
        return Outcome.ok(
            "Tags retrieved successfully", [TagResponse.model_validate(tag) for tag in tags]
        )

    @captures_errors
    async def get_tag(self, tag_id: str, user_id: str) -> Outcome[TagResponse]:
        async with self.core.read():
            tag = self.core.tags.get(tag_id, user_id)
        return Outcome.ok("Tag retrieved successfully", TagResponse.model_validate(tag))

    @captures_errors
    async def create_tag(self, user_id: str, request: TagCreate) -> Outcome[TagResponse]:
        async with self.core.mutation() as txn:
            tag = self.core.tags.create(user_id, {"name": request.name})
        return Outcome.ok(
            "Tag created successfully", TagResponse.model_validate(tag), warning=txn.warning
        )

    @captures_errors
    async def update_tag(self, tag_id: str, user_id: str, request: TagUpdate) -> Outcome[TagResponse]:
        async with self.core.mutation() as txn:
            tag = self.core.tags.update(tag_id, user_id, request.changes())
        return Outcome.ok(
            "Tag updated successfully", TagResponse.model_validate(tag), warning=txn.warning
        )

    @captures_errors
    async def delete_tag(self, tag_id: str, user_id: str) -> Outcome:
        result = await self.core.delete_tag_cascading(tag_id, user_id)
        return Outcome.ok("Tag deleted successfully", warning=result.warning)
