"""Chat service - assistant conversations and general-purpose completions."""

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Optional

from config import settings
from integrations.completion_protocol import (
    CompletionOptions,
    CompletionProvider,
    CompletionResult,
    ProviderMessage,
)
from models.utils import utc_now
from services.streaming import ClientDisconnected, relay, sse_frame
from storage.exceptions import RecordNotFoundError
from storage.protocol import PerceptionStorage
from storage.records import ChatConversationRecord, ChatMessageRecord

logger = logging.getLogger(__name__)

# Features the assistant can point users to; surfaced as suggestions
# when a reply mentions them.
FEATURE_NAMES = (
    "Focus Mode",
    "Motion Blocker",
    "Contrast Control",
    "Larger Click Targets",
    "Text Simplification",
    "Read Aloud",
    "Button Targeting",
)

ASSISTANT_SYSTEM_PROMPT = (
    "You are Perception, a friendly accessibility assistant built into a web "
    "browser extension. Help users browse the web comfortably. When it would "
    "help, recommend the extension's features by name: "
    + ", ".join(FEATURE_NAMES)
    + ". Keep answers short, clear, and free of jargon."
)

EMPTY_REPLY_FALLBACK = "I apologize, but I couldn't generate a response."
STREAM_ERROR_MESSAGE = "Failed to process ChatGPT request"


def find_suggestions(text: str) -> list[str]:
    """Return the feature names mentioned in ``text`` (case-insensitive)."""
    lowered = text.lower()
    return [name for name in FEATURE_NAMES if name.lower() in lowered]


@dataclass
class ChatReply:
    """Result of an assistant chat turn."""

    conversation_id: str
    message: str
    suggestions: list[str]


class ConversationNotFoundError(Exception):
    """The requested conversation does not exist for this user."""

    def __init__(self, conversation_id: str):
        self.conversation_id = conversation_id
        super().__init__(f"Conversation not found: {conversation_id}")


class ChatService:
    """Orchestrates chat requests between the store and the completion provider.

    Store calls run in a worker thread so a SQL backend does not block the
    event loop.
    """

    def __init__(self, provider: CompletionProvider, storage: PerceptionStorage):
        self._provider = provider
        self._storage = storage

    # --- conversation history ---

    def list_conversations(self, user_id: str) -> list[ChatConversationRecord]:
        return self._storage.list_conversations(user_id)

    def get_conversation(self, conversation_id: str) -> Optional[ChatConversationRecord]:
        return self._storage.get_conversation(conversation_id)

    # --- assistant chat ---

    async def chat(
        self, user_id: str, message: str, conversation_id: Optional[str] = None
    ) -> ChatReply:
        """Run one assistant turn and record it in the user's conversation.

        Raises:
            ConversationNotFoundError: ``conversation_id`` is unknown or
                belongs to another user.
            ProviderError: The completion failed; nothing is recorded.
        """
        conversation: Optional[ChatConversationRecord] = None
        if conversation_id:
            conversation = await asyncio.to_thread(
                self._storage.get_conversation, conversation_id
            )
            if conversation is None or conversation.user_id != user_id:
                raise ConversationNotFoundError(conversation_id)

        messages = [ProviderMessage(role="system", content=ASSISTANT_SYSTEM_PROMPT)]
        if conversation is not None:
            messages.extend(
                ProviderMessage(role=m.role, content=m.content)
                for m in conversation.messages
            )
        messages.append(ProviderMessage(role="user", content=message))
        user_turn = ChatMessageRecord(
            role="user", content=message, timestamp=utc_now()
        )

        result = await self._provider.complete(
            messages, CompletionOptions(model=settings.CHAT_MODEL)
        )
        reply = result.content or EMPTY_REPLY_FALLBACK
        turns = [
            user_turn,
            ChatMessageRecord(
                role="assistant", content=reply, timestamp=utc_now()
            ),
        ]

        # New conversations are only stored once the provider has answered
        if conversation is None:
            conversation = await asyncio.to_thread(
                self._storage.create_conversation, user_id, turns
            )
        else:
            try:
                conversation = await asyncio.to_thread(
                    self._storage.append_messages, conversation.id, turns
                )
            except RecordNotFoundError:
                raise ConversationNotFoundError(conversation.id)

        return ChatReply(
            conversation_id=conversation.id,
            message=reply,
            suggestions=find_suggestions(reply),
        )

    # --- general-purpose completions ---

    @staticmethod
    def build_messages(
        message: str,
        conversation_history: list[tuple[str, str]],
        system_prompt: Optional[str] = None,
    ) -> list[ProviderMessage]:
        """Assemble ``[system?] + history + new user message``."""
        messages = []
        if system_prompt:
            messages.append(ProviderMessage(role="system", content=system_prompt))
        messages.extend(
            ProviderMessage(role=role, content=content)
            for role, content in conversation_history
        )
        messages.append(ProviderMessage(role="user", content=message))
        return messages

    async def complete(
        self, messages: list[ProviderMessage], temperature: float, max_tokens: int
    ) -> CompletionResult:
        """Run a non-streaming completion, substituting a fallback for empty replies."""
        result = await self._provider.complete(
            messages,
            CompletionOptions(
                model=settings.CHAT_MODEL, temperature=temperature, max_tokens=max_tokens
            ),
        )
        if not result.content:
            result.content = EMPTY_REPLY_FALLBACK
        return result

    async def stream(
        self,
        messages: list[ProviderMessage],
        temperature: float,
        max_tokens: int,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ) -> AsyncIterator[str]:
        """Yield SSE frames for a streaming completion.

        Each provider increment becomes ``{"content", "done": false}``; the
        stream ends with ``{"content": "", "done": true, "fullResponse"}``,
        or with ``{"content": "", "done": true, "error"}`` if the provider
        fails part-way. Nothing more is sent once the client disconnects.
        """
        chunks = self._provider.complete_streaming(
            messages,
            CompletionOptions(
                model=settings.CHAT_MODEL, temperature=temperature, max_tokens=max_tokens
            ),
        )
        parts: list[str] = []
        try:
            async for content in relay(chunks, is_disconnected=is_disconnected):
                parts.append(content)
                yield sse_frame({"content": content, "done": False})
        except ClientDisconnected:
            return
        except Exception:
            logger.error("Streaming completion failed", exc_info=True)
            yield sse_frame({"content": "", "done": True, "error": STREAM_ERROR_MESSAGE})
            return

        yield sse_frame({"content": "", "done": True, "fullResponse": "".join(parts)})
