"""Middleware for authentication and error translation."""

from .auth import JWTBearer, get_bearer_token, get_current_identity
from .errors import OutcomeFailure, outcome_failure_handler, unwrap

__all__ = [
    "JWTBearer",
    "get_current_identity",
    "get_bearer_token",
    "OutcomeFailure",
    "outcome_failure_handler",
    "unwrap",
]
