"""SQLAlchemy ORM models."""

from .alt_text_cache import AltTextCacheEntry
from .chat_conversation import ChatConversation
from .font_preference import FontPreference
from .system_setting import SystemSetting
from .user_preferences import UserPreferences
from .utils import generate_uuid, utc_now

__all__ = ["AltTextCacheEntry", "ChatConversation", "FontPreference", "SystemSetting", "UserPreferences", "generate_uuid", "utc_now"]
