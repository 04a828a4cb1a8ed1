"""Structured result returned across the core boundary."""

import functools
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

from .errors import ErrorKind, KeepError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Outcome(BaseModel, Generic[T]):
    """Success flag, human readable message and, on success, a value.

    ``warning`` is set when the operation succeeded in memory but the snapshot
    could not be written.
    """

    success: bool
    message: str
    kind: Optional[ErrorKind] = None
    value: Optional[T] = None
    warning: Optional[str] = None

    @classmethod
    def ok(cls, message: str, value: Any = None, warning: Optional[str] = None) -> "Outcome":
        return cls(success=True, message=message, value=value, warning=warning)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Outcome":
        return cls(success=False, message=message, kind=kind)

    @classmethod
    def from_error(cls, error: KeepError) -> "Outcome":
        return cls.fail(error.kind, error.message)


def captures_errors(func: Callable[..., Awaitable[Outcome]]) -> Callable[..., Awaitable[Outcome]]:
    """Turn core exceptions raised by a service method into failed outcomes.

    Hashing and persistence problems are internal: they are logged with the
    traceback and reported with their generic message.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> Outcome:
        try:
            return await func(*args, **kwargs)
        except KeepError as e:
            if e.kind in (ErrorKind.HASHING_ERROR, ErrorKind.INTERNAL):
                logger.error(f"{func.__qualname__} failed", exc_info=e)
                return Outcome.fail(e.kind, e.default_message)
            return Outcome.from_error(e)

    return wrapper
