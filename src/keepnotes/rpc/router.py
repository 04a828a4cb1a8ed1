"""
RPC façade: ``POST /rpc/keepapi.<Service>/<Method>``.

Each method takes one JSON message and always answers HTTP 200 with a reply
envelope; failures are reported through ``success``/``code``. Every method
except Register and Login needs a valid bearer token in the
``Authorization`` header.
"""

import json
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional, Tuple, Type

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core import schemas
from ..core.coordinator import ConsistencyCoordinator
from ..core.logging import get_logger
from ..core.outcome import Outcome
from ..core.services import AuthService, NoteService, TagService, UserService
from ..dependencies import get_core
from ..security.jwt import Identity
from . import messages as m

logger = get_logger("rpc")

PACKAGE = "keepapi"

router = APIRouter(prefix="/rpc", tags=["rpc"])


class RpcContext:
    """Per-call state handed to every method handler."""

    def __init__(self, core: ConsistencyCoordinator, bearer: Optional[str] = None):
        self.core = core
        self.bearer = bearer
        self.identity: Optional[Identity] = None

    @property
    def auth(self) -> AuthService:
        return AuthService(self.core)

    @property
    def notes(self) -> NoteService:
        return NoteService(self.core)

    @property
    def tags(self) -> TagService:
        return TagService(self.core)

    @property
    def users(self) -> UserService:
        return UserService(self.core)

    @property
    def user_id(self) -> str:
        return self.identity.user_id


Handler = Callable[[RpcContext, m.Message], Awaitable[m.StatusResponse]]


@dataclass(frozen=True)
class RpcMethod:
    request: Type[m.Message]
    handler: Handler
    public: bool = False


METHODS: Dict[Tuple[str, str], RpcMethod] = {}


def rpc(service: str, method: str, request: Type[m.Message], public: bool = False):
    """Register a handler for ``keepapi.<service>/<method>``."""

    def register(handler: Handler) -> Handler:
        METHODS[(f"{PACKAGE}.{service}", method)] = RpcMethod(request, handler, public)
        return handler

    return register


def failure(code: m.StatusCode, message: str) -> m.StatusResponse:
    return m.StatusResponse(success=False, message=message, code=code)


def reply(cls: Type[m.StatusResponse], outcome: Outcome, **fields) -> m.StatusResponse:
    """Build a reply of type ``cls`` from a service outcome."""
    if not outcome.success:
        code = m.STATUS_BY_KIND.get(outcome.kind, m.StatusCode.INTERNAL)
        return cls(success=False, message=outcome.message, code=code)
    return cls(success=True, message=outcome.message, warning=outcome.warning, **fields)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


# AuthService


@rpc("AuthService", "Register", m.RegisterRequest, public=True)
async def register(ctx: RpcContext, msg: m.RegisterRequest) -> m.StatusResponse:
    request = schemas.RegisterRequest(username=msg.username, password=msg.password)
    outcome = await ctx.auth.register(request)
    if not outcome.success:
        return reply(m.AuthResponse, outcome)
    return reply(m.AuthResponse, outcome, token=outcome.value.token, user=outcome.value.user)


@rpc("AuthService", "Login", m.LoginRequest, public=True)
async def login(ctx: RpcContext, msg: m.LoginRequest) -> m.StatusResponse:
    request = schemas.LoginRequest(username=msg.username, password=msg.password)
    outcome = await ctx.auth.login(request)
    if not outcome.success:
        return reply(m.AuthResponse, outcome)
    return reply(m.AuthResponse, outcome, token=outcome.value.token, user=outcome.value.user)


@rpc("AuthService", "Logout", m.LogoutRequest)
async def logout(ctx: RpcContext, msg: m.LogoutRequest) -> m.StatusResponse:
    """Revoke the bearer token, or another live token of the same user."""
    token = msg.token or ctx.bearer
    if token != ctx.bearer:
        owner = await ctx.auth.authenticate(token)
        if not owner.success or owner.value.user_id != ctx.user_id:
            return failure(m.StatusCode.INVALID_ARGUMENT, "Token does not belong to the caller")
    return reply(m.StatusResponse, await ctx.auth.logout(token))


# NoteService


@rpc("NoteService", "GetNotes", m.GetNotesRequest)
async def get_notes(ctx: RpcContext, msg: m.GetNotesRequest) -> m.StatusResponse:
    filters = schemas.NoteFilter(archived=msg.archived, tag_id=msg.tag_id or None)
    outcome = await ctx.notes.list_notes(ctx.user_id, filters)
    return reply(m.NotesResponse, outcome, notes=outcome.value or [])


@rpc("NoteService", "GetNote", m.GetNoteRequest)
async def get_note(ctx: RpcContext, msg: m.GetNoteRequest) -> m.StatusResponse:
    outcome = await ctx.notes.get_note(msg.id, ctx.user_id)
    return reply(m.NoteReply, outcome, note=outcome.value)


@rpc("NoteService", "CreateNote", m.CreateNoteRequest)
async def create_note(ctx: RpcContext, msg: m.CreateNoteRequest) -> m.StatusResponse:
    request = schemas.NoteCreate(
        title=msg.title, content=msg.content, tag_ids=msg.tag_ids, color=msg.color or None
    )
    outcome = await ctx.notes.create_note(ctx.user_id, request)
    return reply(m.NoteReply, outcome, note=outcome.value)


@rpc("NoteService", "UpdateNote", m.UpdateNoteRequest)
async def update_note(ctx: RpcContext, msg: m.UpdateNoteRequest) -> m.StatusResponse:
    changes = msg.model_dump(
        include={"title", "content", "tag_ids", "archived", "color"}, exclude_none=True
    )
    outcome = await ctx.notes.update_note(msg.id, ctx.user_id, schemas.NoteUpdate(**changes))
    return reply(m.NoteReply, outcome, note=outcome.value)


@rpc("NoteService", "DeleteNote", m.DeleteNoteRequest)
async def delete_note(ctx: RpcContext, msg: m.DeleteNoteRequest) -> m.StatusResponse:
    return reply(m.StatusResponse, await ctx.notes.delete_note(msg.id, ctx.user_id))


# TagService


@rpc("TagService", "GetTags", m.GetTagsRequest)
async def get_tags(ctx: RpcContext, msg: m.GetTagsRequest) -> m.StatusResponse:
    outcome = await ctx.tags.list_tags(ctx.user_id)
    return reply(m.TagsResponse, outcome, tags=outcome.value or [])


@rpc("TagService", "GetTag", m.GetTagRequest)
async def get_tag(ctx: RpcContext, msg: m.GetTagRequest) -> m.StatusResponse:
    outcome = await ctx.tags.get_tag(msg.id, ctx.user_id)
    return reply(m.TagReply, outcome, tag=outcome.value)


@rpc("TagService", "CreateTag", m.CreateTagRequest)
async def create_tag(ctx: RpcContext, msg: m.CreateTagRequest) -> m.StatusResponse:
    outcome = await ctx.tags.create_tag(ctx.user_id, schemas.TagCreate(name=msg.name))
    return reply(m.TagReply, outcome, tag=outcome.value)


@rpc("TagService", "UpdateTag", m.UpdateTagRequest)
async def update_tag(ctx: RpcContext, msg: m.UpdateTagRequest) -> m.StatusResponse:
    request = schemas.TagUpdate(name=msg.name) if msg.name else schemas.TagUpdate()
    outcome = await ctx.tags.update_tag(msg.id, ctx.user_id, request)
    return reply(m.TagReply, outcome, tag=outcome.value)


@rpc("TagService", "DeleteTag", m.DeleteTagRequest)
async def delete_tag(ctx: RpcContext, msg: m.DeleteTagRequest) -> m.StatusResponse:
    return reply(m.StatusResponse, await ctx.tags.delete_tag(msg.id, ctx.user_id))


# UserService; an empty id means the caller


@rpc("UserService", "GetUser", m.GetUserRequest)
async def get_user(ctx: RpcContext, msg: m.GetUserRequest) -> m.StatusResponse:
    outcome = await ctx.users.get_user(ctx.identity, msg.id or ctx.user_id)
    return reply(m.UserReply, outcome, user=outcome.value)


@rpc("UserService", "UpdateUser", m.UpdateUserRequest)
async def update_user(ctx: RpcContext, msg: m.UpdateUserRequest) -> m.StatusResponse:
    request = schemas.UserUpdateRequest(username=msg.username or None, password=msg.password or None)
    outcome = await ctx.users.update_user(ctx.identity, msg.id or ctx.user_id, request)
    return reply(m.UserReply, outcome, user=outcome.value)


@rpc("UserService", "DeleteUser", m.DeleteUserRequest)
async def delete_user(ctx: RpcContext, msg: m.DeleteUserRequest) -> m.StatusResponse:
    outcome = await ctx.users.delete_user(ctx.identity, msg.id or ctx.user_id)
    return reply(m.StatusResponse, outcome)


async def _read_payload(request: Request) -> dict:
    body = await request.body()
    if not body.strip():
        return {}
    return json.loads(body)


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {first['msg']}" if field else first["msg"]


async def _call(
    service: str, method: str, request: Request, core: ConsistencyCoordinator
) -> m.StatusResponse:
    entry = METHODS.get((service, method))
    if entry is None:
        return failure(m.StatusCode.UNIMPLEMENTED, f"Unknown method {service}/{method}")

    try:
        message = entry.request.model_validate(await _read_payload(request))
    except ValidationError as e:
        return failure(m.StatusCode.INVALID_ARGUMENT, _first_error(e))
    except ValueError:
        # undecodable or malformed JSON
        return failure(m.StatusCode.INVALID_ARGUMENT, "Request body is not valid JSON")

    ctx = RpcContext(core, bearer=bearer_token(request.headers.get("authorization")))
    if not entry.public:
        if ctx.bearer is None:
            return failure(m.StatusCode.UNAUTHENTICATED, "Authentication required")
        outcome = await ctx.auth.authenticate(ctx.bearer)
        if not outcome.success:
            return reply(m.StatusResponse, outcome)
        ctx.identity = outcome.value

    try:
        return await entry.handler(ctx, message)
    except ValidationError as e:
        return failure(m.StatusCode.INVALID_ARGUMENT, _first_error(e))


@router.post("/{service}/{method}")
async def dispatch(
    service: str,
    method: str,
    request: Request,
    core: ConsistencyCoordinator = Depends(get_core),
) -> JSONResponse:
    """Invoke one RPC method."""
    result = await _call(service, method, request, core)
    logger.info(
        "RPC call",
        extra={
            "rpc_service": service,
            "rpc_method": method,
            "success": result.success,
            "code": result.code.value,
        },
    )
    return JSONResponse(content=result.to_json())
