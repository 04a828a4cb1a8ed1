"""Security utilities."""

from .jwt import Identity, TokenAuthority, TokenReason, TokenVerification
from .password import PasswordHasher

__all__ = [
    "PasswordHasher",
    "TokenAuthority",
    "TokenReason",
    "TokenVerification",
    "Identity",
]
