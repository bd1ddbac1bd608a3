"""Security utilities for authentication and authorization."""

from .jwt import (
    AuthenticationError,
    TokenExpiredError,
    TokenPayload,
    create_access_token,
    verify_access_token,
)
from .middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from .passwords import hash_password, needs_rehash, verify_password

__all__ = [
    "create_access_token",
    "verify_access_token",
    "TokenPayload",
    "AuthenticationError",
    "TokenExpiredError",
    "hash_password",
    "verify_password",
    "needs_rehash",
    "SecurityHeadersMiddleware",
    "RequestLoggingMiddleware",
]
