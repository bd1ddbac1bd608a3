"""Application error taxonomy.

Every error a request can end with is an ``AppError`` carrying the HTTP status
it maps to. The exception handlers in ``backend.app.main`` turn these into the
standard ``{success, message, error}`` envelope.
"""

from typing import Any


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or out-of-range request body."""

    status_code = 400
    default_message = "Validation error"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []


class AuthError(AppError):
    """Missing, invalid or expired credential."""

    status_code = 401
    default_message = "Invalid token"


class NotFoundError(AppError):
    """Resource absent or not owned by the caller (deliberately indistinguishable)."""

    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    """Request conflicts with current state."""

    status_code = 409
    default_message = "Conflict"


class GenerationConflictError(ConflictError):
    """Another generation for the same trip committed first; safe to retry."""

    default_message = (
        "Another generation for this trip finished at the same time. Please try again."
    )
    retryable = True


class ProviderUnavailableError(AppError):
    """The AI provider call failed."""

    status_code = 503
    default_message = "AI service is currently unavailable. Please try again later."
    retryable = False


class ProviderRateLimitedError(ProviderUnavailableError):
    """Provider signalled rate limiting or quota exhaustion."""

    default_message = (
        "AI service is temporarily rate-limited. Please wait a minute and try again."
    )
    retryable = True


class ProviderResponseError(ProviderUnavailableError):
    """Provider answered, but not with usable JSON of the expected shape."""

    default_message = "AI service returned an unusable response. Please try again."


class InternalError(AppError):
    """Anything unclassified."""

    status_code = 500
