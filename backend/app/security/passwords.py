"""Password hashing and verification using Argon2id."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from backend.app.config import get_settings

MAX_PASSWORD_LENGTH = 128


def get_password_hasher() -> PasswordHasher:
    """Get configured Argon2id password hasher."""
    return PasswordHasher(
        time_cost=3,        # iterations
        memory_cost=65536,  # 64 MB
        parallelism=1,
        hash_len=32,
        salt_len=16,
        encoding="utf-8",
    )


def hash_password(password: str) -> str:
    """Hash password using Argon2id.

    Args:
        password: Plain text password

    Returns:
        Argon2id hash string

    Raises:
        ValueError: If password is too short or too long
    """
    settings = get_settings()

    if len(password) < settings.password_min_length:
        raise ValueError(
            f"Password must be at least {settings.password_min_length} characters"
        )

    if len(password) > MAX_PASSWORD_LENGTH:
        raise ValueError(f"Password must be {MAX_PASSWORD_LENGTH} characters or less")

    return get_password_hasher().hash(password)


def verify_password(password: str, hash_string: str) -> bool:
    """Verify password against Argon2id hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        get_password_hasher().verify(hash_string, password)
        return True
    except (VerificationError, InvalidHashError):
        return False


def needs_rehash(hash_string: str) -> bool:
    """Check if a stored hash was made with outdated parameters."""
    try:
        return get_password_hasher().check_needs_rehash(hash_string)
    except (InvalidHashError, ValueError):
        return True
