"""Server-sent event relay for streaming provider output.

The provider stream is drained by a producer task into a bounded queue and
re-emitted by the consumer. When the consumer stops early (client
disconnected, response cancelled) the producer task is cancelled, which
closes the provider stream instead of letting it run to completion.
"""

import asyncio
import contextlib
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUFFERED = 32

_DONE = object()


class ClientDisconnected(Exception):
    """The client went away before the stream finished."""

    pass


@dataclass
class _Failure:
    error: Exception


def sse_frame(payload: dict[str, Any]) -> str:
    """Format a server-sent event data frame."""
    return f"data: {json.dumps(payload)}\n\n"


async def relay(
    chunks: AsyncIterator[str],
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    max_buffered: int = DEFAULT_MAX_BUFFERED,
) -> AsyncIterator[str]:
    """Re-yield ``chunks`` through a cancellable producer task.

    Args:
        chunks: Provider text increments.
        is_disconnected: Checked before each chunk is yielded; when it
            returns True the relay stops and raises ClientDisconnected.
        max_buffered: Queue bound; the producer waits when the consumer lags.

    Raises:
        ClientDisconnected: ``is_disconnected`` reported a dropped client.
        Exception: Whatever the provider stream raised, re-raised in the
            consumer.
    """
    queue: asyncio.Queue = asyncio.Queue(maxsize=max_buffered)

    async def produce() -> None:
        try:
            async for chunk in chunks:
                await queue.put(chunk)
        except Exception as exc:
            await queue.put(_Failure(exc))
            return
        finally:
            aclose = getattr(chunks, "aclose", None)
            if aclose is not None:
                await aclose()
        await queue.put(_DONE)

    producer = asyncio.create_task(produce())
    try:
        while True:
            item = await queue.get()
            if item is _DONE:
                return
            if isinstance(item, _Failure):
                raise item.error
            if is_disconnected is not None and await is_disconnected():
                logger.info("Client disconnected; stopping provider stream")
                raise ClientDisconnected()
            yield item
    finally:
        if not producer.done():
            producer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await producer
