"""Access Tokens - HS256 JWT issuing and verification for caller identity.

Invariants:
    - The token subject ("sub") is the user id as a UUID string
    - decode_access_token raises UnauthenticatedError on any invalid, expired or
      malformed token; it never returns a partial identity
    - issue_access_token never raises: it returns a TokenResult

Design Decisions:
    - TokenResult value over callbacks: signing is synchronous, callers branch on .ok
    - PyJWT for encode/decode; the secret and algorithm come from Settings
"""

import logging
import time
from dataclasses import dataclass
from uuid import UUID

import jwt

from app.config import Settings
from app.core.domain_types import UserId
from app.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenResult:
    """Outcome of signing an access token."""
    token: str | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.token is not None

    @classmethod
    def success(cls, token: str) -> "TokenResult":
        return cls(token=token)

    @classmethod
    def failure(cls, reason: str) -> "TokenResult":
        return cls(reason=reason)


def issue_access_token(user_id: UserId, settings: Settings) -> TokenResult:
    """Sign an access token for user_id."""
    now = int(time.time())
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + settings.access_token_expire_seconds,
    }
    try:
        token = jwt.encode(
            payload, settings.jwt_secret, algorithm=settings.jwt_algorithm,
        )
    except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
        logger.error(f"Failed to sign access token: {e}", extra={"user_id": str(user_id)})
        return TokenResult.failure("Token signing failed")
    return TokenResult.success(token)


def decode_access_token(token: str, settings: Settings) -> UserId:
    """Verify a token and return its subject user id."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise UnauthenticatedError("Token has expired")
    except jwt.PyJWTError:
        raise UnauthenticatedError("Token is not valid")
    try:
        return UserId(UUID(payload["sub"]))
    except (TypeError, ValueError):
        raise UnauthenticatedError("Token is not valid")
