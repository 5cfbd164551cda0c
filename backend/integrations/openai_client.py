"""OpenAI chat completions provider."""

import logging
from collections.abc import AsyncIterator
from contextlib import contextmanager
from typing import Any, Optional

import openai
from openai import AsyncOpenAI

from config import settings
from integrations.completion_protocol import CompletionOptions, CompletionResult, ProviderMessage
from integrations.exceptions import (
    ProviderAPIError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderDataError,
)

logger = logging.getLogger(__name__)

_PROVIDER_NAME = "openai"


@contextmanager
def _translate_errors(operation: str):
    """Re-raise OpenAI SDK exceptions as the typed provider hierarchy."""
    try:
        yield
    except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
        raise ProviderAuthError(
            f"OpenAI {operation} rejected credentials (HTTP {exc.status_code})",
            provider_name=_PROVIDER_NAME,
        ) from exc
    except openai.APIStatusError as exc:
        raise ProviderAPIError(
            f"OpenAI {operation} failed (HTTP {exc.status_code})",
            provider_name=_PROVIDER_NAME,
            status_code=exc.status_code,
        ) from exc
    except openai.APIConnectionError as exc:
        # Includes APITimeoutError
        raise ProviderConnectionError(
            f"OpenAI {operation} connection failed: {exc}",
            provider_name=_PROVIDER_NAME,
        ) from exc


class OpenAIClient:
    """Completion provider backed by the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        default_model: Optional[str] = None,
    ):
        """Initialize from explicit arguments, falling back to settings.

        The SDK client is created on first use so the service can start
        (and serve non-AI routes) without an API key.
        """
        self._api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self._base_url = base_url if base_url is not None else settings.OPENAI_BASE_URL
        self._timeout = timeout if timeout is not None else settings.OPENAI_TIMEOUT_SECONDS
        self._max_retries = (
            max_retries if max_retries is not None else settings.OPENAI_MAX_RETRIES
        )
        self._default_model = default_model or settings.CHAT_MODEL
        self._client: Optional[AsyncOpenAI] = None

    @property
    def provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_configured(self) -> bool:
        return bool(self._api_key)

    @property
    def client(self) -> AsyncOpenAI:
        """Get the SDK client, creating it on first use."""
        if self._client is None:
            if not self._api_key:
                raise ProviderAuthError(
                    "OpenAI API key not configured. Set OPENAI_API_KEY in .env",
                    provider_name=_PROVIDER_NAME,
                )
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url or None,
                timeout=self._timeout,
                max_retries=self._max_retries,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    def _request_kwargs(
        self, messages: list[ProviderMessage], options: CompletionOptions
    ) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": options.model or self._default_model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if options.temperature is not None:
            kwargs["temperature"] = options.temperature
        if options.max_tokens is not None:
            kwargs["max_tokens"] = options.max_tokens
        return kwargs

    async def complete(
        self, messages: list[ProviderMessage], options: CompletionOptions
    ) -> CompletionResult:
        """Run a chat completion and return the first choice's text."""
        kwargs = self._request_kwargs(messages, options)
        logger.debug(
            "OpenAI: completion with model %s (%d messages)",
            kwargs["model"], len(messages),
        )

        with _translate_errors("completion"):
            response = await self.client.chat.completions.create(**kwargs)

        if not response.choices:
            raise ProviderDataError(
                "OpenAI completion returned no choices", provider_name=_PROVIDER_NAME
            )

        return CompletionResult(
            content=response.choices[0].message.content or "",
            model=response.model,
            usage=response.usage.model_dump() if response.usage else None,
        )

    async def complete_streaming(
        self, messages: list[ProviderMessage], options: CompletionOptions
    ) -> AsyncIterator[str]:
        """Stream a chat completion, yielding non-empty text deltas."""
        kwargs = self._request_kwargs(messages, options)
        logger.debug("OpenAI: streaming completion with model %s", kwargs["model"])

        with _translate_errors("streaming completion"):
            stream = await self.client.chat.completions.create(stream=True, **kwargs)
            try:
                async for chunk in stream:
                    if not chunk.choices:
                        continue
                    content = chunk.choices[0].delta.content
                    if content:
                        yield content
            finally:
                await stream.close()
