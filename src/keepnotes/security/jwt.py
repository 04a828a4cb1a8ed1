"""JWT bearer tokens and the revocation set."""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from ..core.errors import TokenMalformed
from ..core.models import RevokedToken, User

logger = logging.getLogger(__name__)


class TokenReason(str, Enum):
    """Why a token did not verify."""

    EXPIRED = "Expired"
    BAD_SIGNATURE = "BadSignature"
    REVOKED = "Revoked"


class Identity(BaseModel):
    """Who a valid token speaks for."""

    user_id: str
    username: str
    expires_at: datetime


class TokenVerification(BaseModel):
    """Result of ``TokenAuthority.verify``."""

    valid: bool
    identity: Optional[Identity] = None
    reason: Optional[TokenReason] = None

    @classmethod
    def ok(cls, identity: Identity) -> "TokenVerification":
        return cls(valid=True, identity=identity)

    @classmethod
    def fail(cls, reason: TokenReason) -> "TokenVerification":
        return cls(valid=False, reason=reason)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _expiry_datetime(exp: Any) -> Optional[datetime]:
    """``exp`` claim as an aware datetime, None if it is not a usable timestamp."""
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return None
    try:
        return datetime.fromtimestamp(exp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        # out of range for the platform, or NaN
        return None


class TokenAuthority:
    """Issues, verifies and revokes signed bearer tokens.

    Tokens are not stored; only revoked-but-unexpired ones are remembered, in
    insertion order, keyed by the token string.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=24),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime
        self.clock = clock
        self._revoked: Dict[str, RevokedToken] = {}

    def issue(self, user: User) -> str:
        """Create a token bound to ``user`` valid for ``lifetime``."""
        issued_at = self.clock()
        expires_at = issued_at + self.lifetime
        claims = {
            "sub": user.id,
            "id": user.id,
            "username": user.username,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            # keeps two tokens issued in the same second distinct
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> TokenVerification:
        """Check signature, then expiry, then the revocation set."""
        now = now or self.clock()
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError:
            return TokenVerification.fail(TokenReason.BAD_SIGNATURE)

        user_id = claims.get("sub") or claims.get("id")
        exp = claims.get("exp")
        if not user_id:
            return TokenVerification.fail(TokenReason.BAD_SIGNATURE)

        expires_at = _expiry_datetime(exp)
        if expires_at is None:
            return TokenVerification.fail(TokenReason.BAD_SIGNATURE)
        if expires_at <= now:
            return TokenVerification.fail(TokenReason.EXPIRED)

        if token in self._revoked:
            return TokenVerification.fail(TokenReason.REVOKED)

        return TokenVerification.ok(
            Identity(
                user_id=str(user_id),
                username=str(claims.get("username", "")),
                expires_at=expires_at,
            )
        )

    def revoke(self, token: str) -> RevokedToken:
        """Add ``token`` to the revocation set until its own expiry.

        The signature is not re-checked so a token can always be revoked; only
        a token without a readable ``exp`` is refused.
        """
        expires_at = self._read_expiry(token)
        entry = self._revoked.get(token)
        if entry is None:
            entry = RevokedToken(token=token, expires_at=expires_at)
            self._revoked[token] = entry
        return entry

    def purge_expired(self, now: Optional[datetime] = None) -> int:
        """Drop every revocation whose token has expired by ``now``."""
        now = now or self.clock()
        stale = [t for t, entry in self._revoked.items() if entry.is_expired(now)]
        for token in stale:
            del self._revoked[token]
        if stale:
            logger.info(f"Purged {len(stale)} expired revocations")
        return len(stale)

    def is_revoked(self, token: str) -> bool:
        return token in self._revoked

    @property
    def revoked_count(self) -> int:
        return len(self._revoked)

    def snapshot(self) -> List[RevokedToken]:
        return list(self._revoked.values())

    def load(self, entries: Iterable[RevokedToken]) -> None:
        self._revoked = {entry.token: entry for entry in entries}

    @staticmethod
    def _read_expiry(token: str) -> datetime:
        try:
            claims: Dict[str, Any] = jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenMalformed() from e
        exp = claims.get("exp")
        expires_at = _expiry_datetime(exp)
        if expires_at is None:
            raise TokenMalformed()
        return expires_at
