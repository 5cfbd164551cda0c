"""Pydantic request and response schemas."""

from schemas.accessibility import (
    AltTextRequest,
    AltTextResponse,
    ReadAloudRequest,
    ReadAloudResponse,
    SimplifyRequest,
    SimplifyResponse,
    WordTiming,
)
from schemas.chat import (
    ChatGPTRequest,
    ChatGPTResponse,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    ConversationResponse,
    HistoryMessage,
)
from schemas.font_preference import (
    FontPreferenceCreate,
    FontPreferenceResponse,
    FontPreferenceUpdate,
)
from schemas.preferences import (
    FontSizeAdjustRequest,
    FontSizeAdjustResponse,
    FontSizeResponse,
    UserPreferencesResponse,
    UserPreferencesUpdate,
)

__all__ = [
    "AltTextRequest",
    "AltTextResponse",
    "ChatGPTRequest",
    "ChatGPTResponse",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "ConversationResponse",
    "FontPreferenceCreate",
    "FontPreferenceResponse",
    "FontPreferenceUpdate",
    "FontSizeAdjustRequest",
    "FontSizeAdjustResponse",
    "FontSizeResponse",
    "HistoryMessage",
    "ReadAloudRequest",
    "ReadAloudResponse",
    "SimplifyRequest",
    "SimplifyResponse",
    "UserPreferencesResponse",
    "UserPreferencesUpdate",
    "WordTiming",
]
