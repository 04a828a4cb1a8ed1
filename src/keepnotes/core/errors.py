"""Failure kinds raised inside the core.

Stores and the token authority raise these; the service layer turns them into
an ``Outcome`` so nothing below crosses into a façade as an exception.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure a caller can observe."""

    DUPLICATE_USERNAME = "DuplicateUsername"
    INVALID_CREDENTIALS = "InvalidCredentials"
    NOT_FOUND = "NotFound"
    TOKEN_EXPIRED = "TokenExpired"
    TOKEN_REVOKED = "TokenRevoked"
    TOKEN_MALFORMED = "TokenMalformed"
    HASHING_ERROR = "HashingError"
    INVALID_ARGUMENT = "InvalidArgument"
    INTERNAL = "Internal"


class KeepError(Exception):
    """Base class for core failures."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateUsername(KeepError):
    kind = ErrorKind.DUPLICATE_USERNAME
    default_message = "Username already exists"


class InvalidCredentials(KeepError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid username or password"


class NotFound(KeepError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"

    @classmethod
    def of(cls, entity: str) -> "NotFound":
        return cls(f"{entity} not found")


class TokenExpired(KeepError):
    kind = ErrorKind.TOKEN_EXPIRED
    default_message = "Token has expired"


class TokenRevoked(KeepError):
    kind = ErrorKind.TOKEN_REVOKED
    default_message = "Token has been revoked"


class TokenMalformed(KeepError):
    kind = ErrorKind.TOKEN_MALFORMED
    default_message = "Invalid token"


class HashingError(KeepError):
    kind = ErrorKind.HASHING_ERROR
    default_message = "Error processing password"


class InvalidArgument(KeepError):
    kind = ErrorKind.INVALID_ARGUMENT
    default_message = "Invalid argument"


class PersistenceError(KeepError):
    """Snapshot could not be read or written."""

    kind = ErrorKind.INTERNAL
    default_message = "Error saving data"
