"""Bearer token issuing and verification (JWT, HS256)."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from accounts.domain import User
from accounts.domain.errors import InvalidTokenError
from common.domain import UserId
from eventful.conf import get_setting


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims carried by a bearer token."""

    user_id: UserId
    role: str
    expires_at: datetime


def issue_token(user: User, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "role": user.role,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(hours=get_setting("JWT_TTL_HOURS"))).timestamp()),
    }
    return jwt.encode(claims, get_setting("JWT_SECRET"), algorithm=get_setting("JWT_ALGORITHM"))


def verify_token(token: str) -> TokenClaims:
    """Decode and verify a token.

    Raises:
        InvalidTokenError: If the token is malformed, badly signed or expired.
    """
    try:
        decoded = jwt.decode(token, get_setting("JWT_SECRET"), algorithms=[get_setting("JWT_ALGORITHM")])
    except ExpiredSignatureError:
        raise InvalidTokenError("Token has expired")
    except JWTError:
        raise InvalidTokenError()
    try:
        user_id = UserId.from_string(decoded["sub"])
    except (KeyError, ValueError):
        raise InvalidTokenError()
    return TokenClaims(
        user_id=user_id,
        role=decoded.get("role", ""),
        expires_at=datetime.fromtimestamp(decoded["exp"], tz=timezone.utc),
    )
