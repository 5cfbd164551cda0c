"""Plain record types returned by the storage backends.

Both backends hand these out instead of ORM rows so API and service code
never depend on which backend is configured.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DEFAULT_CONTRAST_LEVEL = "normal"
DEFAULT_FONT_SIZE = "100"


@dataclass
class UserPreferencesRecord:
    """Accessibility preferences for one extension user."""

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    focus_mode: bool = False
    motion_blocker: bool = False
    contrast_level: str = DEFAULT_CONTRAST_LEVEL
    larger_click_targets: bool = False
    text_simplification: bool = False
    read_aloud: bool = False
    font_size: str = DEFAULT_FONT_SIZE
    preferences: dict[str, Any] = field(default_factory=dict)


# Fields a client may set on a UserPreferencesRecord
USER_PREFERENCE_FIELDS = (
    "focus_mode",
    "motion_blocker",
    "contrast_level",
    "larger_click_targets",
    "text_simplification",
    "read_aloud",
    "font_size",
    "preferences",
)


@dataclass
class ChatMessageRecord:
    """A single chat turn."""

    role: str  # "user" | "assistant"
    content: str
    timestamp: datetime


@dataclass
class ChatConversationRecord:
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    messages: list[ChatMessageRecord] = field(default_factory=list)


@dataclass
class AltTextCacheRecord:
    id: str
    image_url: str
    alt_text: str
    created_at: datetime


@dataclass
class FontPreferenceRecord:
    """Stylist font preference."""

    id: str
    font_family: str
    font_size: int  # px
