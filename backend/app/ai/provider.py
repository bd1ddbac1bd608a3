"""Completion provider protocol and its OpenAI-compatible implementation.

The generation workflow depends only on ``CompletionProvider``. Production code
injects ``OpenAICompletionProvider``; tests inject a scripted fake.
"""

from __future__ import annotations

import logging
from typing import Literal, Protocol

from openai import APIStatusError, OpenAI, OpenAIError, RateLimitError
from pydantic import BaseModel, ConfigDict, Field

from backend.app.config import MissingAIKeyError, Settings, get_openai_api_key
from backend.app.errors import ProviderRateLimitedError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class Message(BaseModel):
    """Chat message."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"] = Field(description="Speaker role")
    content: str = Field(description="Message content")


class CompletionParams(BaseModel):
    """Sampling parameters for a single completion call."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(ge=0.0, le=2.0)
    max_tokens: int = Field(gt=0)
    json_mode: bool = Field(
        default=True, description="Ask the provider for a JSON object response"
    )


class CompletionProvider(Protocol):
    """Anything that turns a message list into completion text."""

    model_name: str

    def complete(self, messages: list[Message], params: CompletionParams) -> str:
        """Return the raw completion text.

        Raises:
            ProviderRateLimitedError: Provider signalled rate limiting
            ProviderUnavailableError: Any other provider failure or empty output
        """
        ...


def _is_rate_limit(exc: OpenAIError) -> bool:
    if isinstance(exc, RateLimitError):
        return True
    if isinstance(exc, APIStatusError) and exc.status_code == 429:
        return True
    return "rate_limit" in str(exc).lower()


class OpenAICompletionProvider:
    """Chat-completions provider for OpenAI or any compatible endpoint (e.g. Groq)."""

    def __init__(self, settings: Settings, client: OpenAI | None = None):
        self.model_name = settings.openai_model
        self._base_url = settings.openai_base_url
        self._max_tokens = settings.ai_max_tokens
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            # Built lazily so a missing key only fails generation, not startup
            self._client = OpenAI(
                api_key=get_openai_api_key(),
                base_url=self._base_url,
                max_retries=0,
            )
        return self._client

    def complete(self, messages: list[Message], params: CompletionParams) -> str:
        try:
            client = self._get_client()
        except MissingAIKeyError as e:
            logger.warning("Completion provider not configured: %s", e)
            raise ProviderUnavailableError() from e

        request = {
            "model": self.model_name,
            "messages": [m.model_dump() for m in messages],
            "temperature": params.temperature,
            "max_tokens": min(params.max_tokens, self._max_tokens),
        }
        if params.json_mode:
            request["response_format"] = {"type": "json_object"}

        try:
            response = client.chat.completions.create(**request)
        except OpenAIError as e:
            if _is_rate_limit(e):
                logger.warning("Completion provider rate-limited: %s", e)
                raise ProviderRateLimitedError() from e
            logger.warning("Completion provider call failed: %s", e)
            raise ProviderUnavailableError() from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning("Completion provider returned an empty response")
            raise ProviderUnavailableError()

        return content
