"""Standard response envelope: ``{success, data?, message?, error?}``."""

from typing import Any, Generic, TypeVar

from pydantic import model_serializer

from backend.app.models.common import CamelModel

T = TypeVar("T")


class ApiResponse(CamelModel, Generic[T]):
    """Envelope wrapping every API response body."""

    success: bool = True
    data: T | None = None
    message: str | None = None
    error: str | None = None

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        body = handler(self)
        return {key: value for key, value in body.items() if value is not None}


def error_body(message: str, error: str | None = None, **extra: Any) -> dict[str, Any]:
    """Body for a failed request."""
    body: dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    body.update(extra)
    return body
