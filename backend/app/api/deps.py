"""Shared FastAPI dependencies."""

from backend.app.ai.provider import CompletionProvider, OpenAICompletionProvider
from backend.app.config import get_settings
from backend.app.db.session import get_session

__all__ = ["get_completion_provider", "get_session"]


def get_completion_provider() -> CompletionProvider:
    """Completion provider for generation endpoints; overridden in tests."""
    return OpenAICompletionProvider(get_settings())
