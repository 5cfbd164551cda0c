"""Completion provider protocol definitions.

Defines the interface the assistant services use to reach an external
large-language-model. Message content is either plain text or a list of
content parts (text and image references) for vision requests.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class ProviderMessage:
    """A single message sent to the provider."""

    role: str  # "system" | "user" | "assistant"
    content: str | list[dict[str, Any]]


@dataclass
class CompletionOptions:
    """Per-request generation options. None means provider default."""

    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None


@dataclass
class CompletionResult:
    """A finished (non-streaming) completion."""

    content: str  # Empty string when the provider returned no text
    model: str
    usage: dict[str, Any] | None = None


def text_part(text: str) -> dict[str, Any]:
    """Build a text content part for a multi-part message."""
    return {"type": "text", "text": text}


def image_part(url: str) -> dict[str, Any]:
    """Build an image reference content part for a multi-part message."""
    return {"type": "image_url", "image_url": {"url": url}}


class CompletionProvider(Protocol):
    """Protocol for chat/vision completion providers."""

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'openai')."""
        ...

    async def complete(
        self, messages: list[ProviderMessage], options: CompletionOptions
    ) -> CompletionResult:
        """Run a completion and return the full response.

        Raises:
            ProviderError: Any provider-side failure, typed by cause.
        """
        ...

    def complete_streaming(
        self, messages: list[ProviderMessage], options: CompletionOptions
    ) -> AsyncIterator[str]:
        """Run a streaming completion, yielding text increments as they arrive.

        Closing the iterator early must release the underlying stream.
        """
        ...
