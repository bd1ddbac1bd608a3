"""AI text-completion provider abstraction."""

from .provider import (
    CompletionParams,
    CompletionProvider,
    Message,
    OpenAICompletionProvider,
)

__all__ = [
    "CompletionParams",
    "CompletionProvider",
    "Message",
    "OpenAICompletionProvider",
]
