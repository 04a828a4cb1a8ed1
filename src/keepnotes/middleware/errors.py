"""Translation of core outcomes into HTTP errors."""

from typing import Any, Optional, TypeVar

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..core.errors import ErrorKind
from ..core.outcome import Outcome
from ..core.schemas.common import ErrorResponse

T = TypeVar("T")

HTTP_STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DUPLICATE_USERNAME: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_REVOKED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TOKEN_MALFORMED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.HASHING_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class OutcomeFailure(Exception):
    """Raised by REST handlers for a failed outcome; rendered as ErrorResponse."""

    def __init__(self, kind: ErrorKind, message: str, details: Optional[dict[str, Any]] = None):
        self.kind = kind
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND.get(self.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)


def unwrap(outcome: Outcome[T]) -> T:
    """Value of a successful outcome, OutcomeFailure otherwise."""
    if not outcome.success:
        raise OutcomeFailure(outcome.kind or ErrorKind.INTERNAL, outcome.message)
    return outcome.value


async def outcome_failure_handler(request: Request, exc: OutcomeFailure) -> JSONResponse:
    body = ErrorResponse(error=exc.kind.value, message=exc.message, details=exc.details)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code, content=body.model_dump(mode="json"), headers=headers
    )
