"""
JSON messages of the ``keepapi`` RPC services.

Field names match the ``keepapi`` protobuf definitions. Every reply carries the
``success``/``message`` pair plus a status ``code``. Unlike proto3 scalars, an
absent field here means "not sent", so ``archived: false`` can be told apart
from no filter at all.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.errors import ErrorKind
from ..core.schemas.auth import UserResponse
from ..core.schemas.notes import NoteResponse
from ..core.schemas.tags import TagResponse


class StatusCode(str, Enum):
    """gRPC-style status names."""

    OK = "OK"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INTERNAL = "INTERNAL"
    UNIMPLEMENTED = "UNIMPLEMENTED"


STATUS_BY_KIND = {
    ErrorKind.DUPLICATE_USERNAME: StatusCode.ALREADY_EXISTS,
    ErrorKind.INVALID_CREDENTIALS: StatusCode.UNAUTHENTICATED,
    ErrorKind.NOT_FOUND: StatusCode.NOT_FOUND,
    ErrorKind.TOKEN_EXPIRED: StatusCode.UNAUTHENTICATED,
    ErrorKind.TOKEN_REVOKED: StatusCode.UNAUTHENTICATED,
    ErrorKind.TOKEN_MALFORMED: StatusCode.UNAUTHENTICATED,
    ErrorKind.INVALID_ARGUMENT: StatusCode.INVALID_ARGUMENT,
    ErrorKind.HASHING_ERROR: StatusCode.INTERNAL,
    ErrorKind.INTERNAL: StatusCode.INTERNAL,
}


class Message(BaseModel):
    # unknown fields are tolerated, as protobuf readers do
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


# Requests


class RegisterRequest(Message):
    username: str = ""
    password: str = ""


class LoginRequest(Message):
    username: str = ""
    password: str = ""


class LogoutRequest(Message):
    token: str = ""


class GetNotesRequest(Message):
    user_id: Optional[str] = None  # ignored, the owner is the caller
    archived: Optional[bool] = None
    tag_id: Optional[str] = None


class GetNoteRequest(Message):
    id: str = ""
    user_id: Optional[str] = None


class CreateNoteRequest(Message):
    title: str = ""
    content: str = ""
    tag_ids: List[str] = Field(default_factory=list)
    user_id: Optional[str] = None
    color: Optional[str] = None


class UpdateNoteRequest(Message):
    id: str = ""
    title: Optional[str] = None
    content: Optional[str] = None
    tag_ids: Optional[List[str]] = None
    user_id: Optional[str] = None
    archived: Optional[bool] = None
    color: Optional[str] = None


class DeleteNoteRequest(Message):
    id: str = ""
    user_id: Optional[str] = None


class GetTagsRequest(Message):
    user_id: Optional[str] = None


class GetTagRequest(Message):
    id: str = ""
    user_id: Optional[str] = None


class CreateTagRequest(Message):
    name: str = ""
    user_id: Optional[str] = None


class UpdateTagRequest(Message):
    id: str = ""
    name: Optional[str] = None
    user_id: Optional[str] = None


class DeleteTagRequest(Message):
    id: str = ""
    user_id: Optional[str] = None


class GetUserRequest(Message):
    id: str = ""


class UpdateUserRequest(Message):
    id: str = ""
    username: Optional[str] = None
    password: Optional[str] = None


class DeleteUserRequest(Message):
    id: str = ""


# Replies


class StatusResponse(Message):
    success: bool
    message: str
    code: StatusCode = StatusCode.OK
    warning: Optional[str] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AuthResponse(StatusResponse):
    token: Optional[str] = None
    user: Optional[UserResponse] = None


class NotesResponse(StatusResponse):
    notes: List[NoteResponse] = Field(default_factory=list)


class NoteReply(StatusResponse):
    note: Optional[NoteResponse] = None


class TagsResponse(StatusResponse):
    tags: List[TagResponse] = Field(default_factory=list)


class TagReply(StatusResponse):
    tag: Optional[TagResponse] = None


class UserReply(StatusResponse):
    user: Optional[UserResponse] = None
