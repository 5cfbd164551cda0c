"""Pydantic schemas for chat and conversation endpoints."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import Field

from schemas.base import CamelModel


class ChatMessage(CamelModel):
    """A stored chat turn as returned in a conversation."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime


class HistoryMessage(CamelModel):
    """A prior turn supplied by the client. The timestamp is opaque and unused."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: Optional[str] = None


class ChatRequest(CamelModel):
    """Request body for POST /api/chat."""

    user_id: str = Field(min_length=1)
    message: str = Field(min_length=1)
    conversation_id: Optional[str] = None


class ChatResponse(CamelModel):
    conversation_id: str
    message: str
    suggestions: list[str]


class ChatGPTRequest(CamelModel):
    """Request body for POST /api/chatgpt."""

    message: str = Field(min_length=1)
    conversation_history: list[HistoryMessage] = Field(default_factory=list)
    system_prompt: Optional[str] = None
    temperature: float = Field(default=0.7, ge=0, le=2)
    max_tokens: int = Field(default=1000, ge=1, le=4000)
    stream: bool = False


class ChatGPTResponse(CamelModel):
    message: str
    usage: Optional[dict[str, Any]] = None
    model: str


class ConversationResponse(CamelModel):
    id: str
    user_id: str
    messages: list[ChatMessage]
    created_at: datetime
    updated_at: datetime
