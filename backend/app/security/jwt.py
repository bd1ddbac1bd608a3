"""JWT access token creation and verification."""

import jwt
from datetime import UTC, datetime, timedelta
from typing import Literal
from uuid import UUID

from pydantic import BaseModel

from backend.app.config import get_settings


class TokenPayload(BaseModel):
    """JWT token payload."""
    user_id: UUID
    email: str
    token_type: Literal["access"]
    issued_at: datetime
    expires_at: datetime


class AuthenticationError(Exception):
    """Authentication-related errors."""
    pass


class TokenExpiredError(AuthenticationError):
    """Token signature is valid but its exp claim is in the past."""
    pass


def create_access_token(
    user_id: UUID, email: str, expires_delta: timedelta | None = None
) -> str:
    """Create an HMAC-signed JWT access token.

    Args:
        user_id: User UUID (stored as ``sub``)
        email: User e-mail address
        expires_delta: Lifetime override; defaults to the configured TTL

    Returns:
        Encoded JWT token string
    """
    settings = get_settings()
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_ttl_minutes)

    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
        "type": "access",
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: str) -> TokenPayload:
    """Verify and decode JWT access token.

    Args:
        token: JWT token string

    Returns:
        TokenPayload with user info

    Raises:
        TokenExpiredError: If the token has expired
        AuthenticationError: If the token is invalid or of the wrong type
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )

        if payload.get("type") != "access":
            raise AuthenticationError("Invalid token type")

        return TokenPayload(
            user_id=UUID(payload["sub"]),
            email=payload.get("email", ""),
            token_type=payload["type"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
        )

    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {e}")
    except (KeyError, ValueError, TypeError) as e:
        raise AuthenticationError(f"Malformed token payload: {e}")
