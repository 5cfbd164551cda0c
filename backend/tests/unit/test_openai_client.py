"""Unit tests for OpenAIClient completion provider implementation."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from integrations.completion_protocol import CompletionOptions, ProviderMessage
from integrations.exceptions import (
    ProviderAPIError,
    ProviderAuthError,
    ProviderConnectionError,
    ProviderDataError,
)
from integrations.openai_client import OpenAIClient

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")

MESSAGES = [
    ProviderMessage(role="system", content="Be brief"),
    ProviderMessage(role="user", content="Hi"),
]


def _response(content="Hello!", model="gpt-4", usage=None):
    usage_obj = (
        SimpleNamespace(model_dump=lambda: usage) if usage is not None else None
    )
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        model=model,
        usage=usage_obj,
    )


def _chunk(content):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=content))])


class _FakeStream:
    def __init__(self, chunks):
        self._chunks = chunks
        self.close = AsyncMock()

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self._chunks:
            yield chunk


@pytest.fixture
def client():
    """OpenAIClient with the SDK client replaced by a mock."""
    provider = OpenAIClient(api_key="sk-test", default_model="gpt-4")
    provider._client = MagicMock()
    provider._client.chat.completions.create = AsyncMock()
    provider._client.close = AsyncMock()
    return provider


def _create(client):
    return client._client.chat.completions.create


class TestConfiguration:
    def test_is_configured_with_key(self):
        assert OpenAIClient(api_key="sk-test").is_configured() is True

    def test_not_configured_without_key(self):
        assert OpenAIClient(api_key="").is_configured() is False

    def test_missing_key_raises_auth_error(self):
        provider = OpenAIClient(api_key="")
        with pytest.raises(ProviderAuthError, match="OPENAI_API_KEY"):
            provider.client

    def test_provider_name(self):
        assert OpenAIClient(api_key="sk-test").provider_name == "openai"

    @pytest.mark.asyncio
    async def test_close_releases_sdk_client(self, client):
        sdk_client = client._client

        await client.close()

        sdk_client.close.assert_awaited_once()
        assert client._client is None


class TestComplete:
    @pytest.mark.asyncio
    async def test_returns_first_choice(self, client):
        _create(client).return_value = _response(
            "Hello!", model="gpt-4-0613", usage={"total_tokens": 9}
        )

        result = await client.complete(MESSAGES, CompletionOptions(temperature=0.5, max_tokens=20))

        assert result.content == "Hello!"
        assert result.model == "gpt-4-0613"
        assert result.usage == {"total_tokens": 9}
        _create(client).assert_awaited_once_with(
            model="gpt-4",
            messages=[
                {"role": "system", "content": "Be brief"},
                {"role": "user", "content": "Hi"},
            ],
            temperature=0.5,
            max_tokens=20,
        )

    @pytest.mark.asyncio
    async def test_unset_options_not_sent(self, client):
        _create(client).return_value = _response()

        await client.complete(MESSAGES, CompletionOptions(model="gpt-4o"))

        kwargs = _create(client).await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert "temperature" not in kwargs
        assert "max_tokens" not in kwargs

    @pytest.mark.asyncio
    async def test_none_content_becomes_empty_string(self, client):
        _create(client).return_value = _response(content=None)

        result = await client.complete(MESSAGES, CompletionOptions())

        assert result.content == ""
        assert result.usage is None

    @pytest.mark.asyncio
    async def test_no_choices_raises_data_error(self, client):
        _create(client).return_value = SimpleNamespace(choices=[], model="gpt-4", usage=None)

        with pytest.raises(ProviderDataError):
            await client.complete(MESSAGES, CompletionOptions())


class TestErrorTranslation:
    @pytest.mark.asyncio
    async def test_authentication_error(self, client):
        _create(client).side_effect = openai.AuthenticationError(
            "bad key", response=httpx.Response(401, request=_REQUEST), body=None
        )

        with pytest.raises(ProviderAuthError):
            await client.complete(MESSAGES, CompletionOptions())

    @pytest.mark.asyncio
    async def test_rate_limit_is_retriable_api_error(self, client):
        _create(client).side_effect = openai.RateLimitError(
            "slow down", response=httpx.Response(429, request=_REQUEST), body=None
        )

        with pytest.raises(ProviderAPIError) as exc_info:
            await client.complete(MESSAGES, CompletionOptions())

        assert exc_info.value.status_code == 429
        assert exc_info.value.retriable is True

    @pytest.mark.asyncio
    async def test_timeout_is_connection_error(self, client):
        _create(client).side_effect = openai.APITimeoutError(request=_REQUEST)

        with pytest.raises(ProviderConnectionError):
            await client.complete(MESSAGES, CompletionOptions())


class TestCompleteStreaming:
    @pytest.mark.asyncio
    async def test_yields_non_empty_deltas(self, client):
        stream = _FakeStream([_chunk("Hel"), _chunk(None), SimpleNamespace(choices=[]), _chunk("lo")])
        _create(client).return_value = stream

        received = [c async for c in client.complete_streaming(MESSAGES, CompletionOptions())]

        assert received == ["Hel", "lo"]
        assert _create(client).await_args.kwargs["stream"] is True
        stream.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_early_close_closes_sdk_stream(self, client):
        stream = _FakeStream([_chunk("a"), _chunk("b"), _chunk("c")])
        _create(client).return_value = stream

        iterator = client.complete_streaming(MESSAGES, CompletionOptions())
        assert await iterator.__anext__() == "a"
        await iterator.aclose()

        stream.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connection_failure_translated(self, client):
        _create(client).side_effect = openai.APIConnectionError(request=_REQUEST)

        with pytest.raises(ProviderConnectionError):
            async for _ in client.complete_streaming(MESSAGES, CompletionOptions()):
                pass
