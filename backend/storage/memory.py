"""In-memory storage backend.

Records live in process-local dicts for the lifetime of the process. A
single re-entrant lock makes each public method atomic, so get-or-create
and append operations cannot interleave between request threads.
"""

import copy
import logging
import threading
from typing import Any

from models.utils import generate_uuid, utc_now
from storage.exceptions import RecordNotFoundError
from storage.records import (
    USER_PREFERENCE_FIELDS,
    AltTextCacheRecord,
    ChatConversationRecord,
    ChatMessageRecord,
    FontPreferenceRecord,
    UserPreferencesRecord,
)

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Dict-backed implementation of both storage protocols."""

    def __init__(self):
        self._lock = threading.RLock()
        # Primary maps keyed by record id
        self._user_preferences: dict[str, UserPreferencesRecord] = {}
        self._conversations: dict[str, ChatConversationRecord] = {}
        self._alt_text: dict[str, AltTextCacheRecord] = {}
        self._font_preferences: dict[str, FontPreferenceRecord] = {}
        # Secondary indexes enforcing one record per natural key
        self._preferences_by_user: dict[str, str] = {}
        self._alt_text_by_url: dict[str, str] = {}
        self._current_font_preference_id: str | None = None

    @property
    def backend_name(self) -> str:
        return "memory"

    # --- user preferences ---

    def get_user_preferences(self, user_id: str) -> UserPreferencesRecord | None:
        with self._lock:
            record_id = self._preferences_by_user.get(user_id)
            if record_id is None:
                return None
            return copy.deepcopy(self._user_preferences[record_id])

    def create_user_preferences(
        self, user_id: str, **fields: Any
    ) -> UserPreferencesRecord:
        with self._lock:
            if user_id in self._preferences_by_user:
                return self.update_user_preferences(user_id, fields)

            now = utc_now()
            record = UserPreferencesRecord(
                id=generate_uuid(),
                user_id=user_id,
                created_at=now,
                updated_at=now,
                **_pick_preference_fields(fields),
            )
            self._user_preferences[record.id] = record
            self._preferences_by_user[user_id] = record.id
            logger.info("Created preferences for user %s", user_id)
            return copy.deepcopy(record)

    def get_or_create_user_preferences(
        self, user_id: str
    ) -> tuple[UserPreferencesRecord, bool]:
        with self._lock:
            existing = self.get_user_preferences(user_id)
            if existing is not None:
                return existing, False
            return self.create_user_preferences(user_id), True

    def update_user_preferences(
        self, user_id: str, updates: dict[str, Any]
    ) -> UserPreferencesRecord:
        with self._lock:
            record_id = self._preferences_by_user.get(user_id)
            if record_id is None:
                raise RecordNotFoundError("UserPreferences", user_id)

            record = self._user_preferences[record_id]
            for name, value in _pick_preference_fields(updates).items():
                setattr(record, name, copy.deepcopy(value))
            record.updated_at = utc_now()
            logger.info("Updated preferences for user %s", user_id)
            return copy.deepcopy(record)

    # --- chat conversations ---

    def get_conversation(self, conversation_id: str) -> ChatConversationRecord | None:
        with self._lock:
            record = self._conversations.get(conversation_id)
            return copy.deepcopy(record) if record is not None else None

    def list_conversations(self, user_id: str) -> list[ChatConversationRecord]:
        with self._lock:
            return [
                copy.deepcopy(conv)
                for conv in self._conversations.values()
                if conv.user_id == user_id
            ]

    def create_conversation(
        self, user_id: str, messages: list[ChatMessageRecord] | None = None
    ) -> ChatConversationRecord:
        with self._lock:
            now = utc_now()
            record = ChatConversationRecord(
                id=generate_uuid(),
                user_id=user_id,
                created_at=now,
                updated_at=now,
                messages=copy.deepcopy(messages or []),
            )
            self._conversations[record.id] = record
            logger.info("Created conversation %s for user %s", record.id, user_id)
            return copy.deepcopy(record)

    def append_messages(
        self, conversation_id: str, messages: list[ChatMessageRecord]
    ) -> ChatConversationRecord:
        with self._lock:
            record = self._conversations.get(conversation_id)
            if record is None:
                raise RecordNotFoundError("ChatConversation", conversation_id)
            record.messages.extend(copy.deepcopy(messages))
            record.updated_at = utc_now()
            return copy.deepcopy(record)

    # --- alt text cache ---

    def get_alt_text(self, image_url: str) -> AltTextCacheRecord | None:
        with self._lock:
            record_id = self._alt_text_by_url.get(image_url)
            if record_id is None:
                return None
            return copy.deepcopy(self._alt_text[record_id])

    def cache_alt_text(self, image_url: str, alt_text: str) -> AltTextCacheRecord:
        with self._lock:
            record_id = self._alt_text_by_url.get(image_url)
            if record_id is not None:
                record = self._alt_text[record_id]
                record.alt_text = alt_text
                return copy.deepcopy(record)

            record = AltTextCacheRecord(
                id=generate_uuid(),
                image_url=image_url,
                alt_text=alt_text,
                created_at=utc_now(),
            )
            self._alt_text[record.id] = record
            self._alt_text_by_url[image_url] = record.id
            return copy.deepcopy(record)

    # --- font preferences ---

    def get_font_preference(self, preference_id: str) -> FontPreferenceRecord | None:
        with self._lock:
            record = self._font_preferences.get(preference_id)
            return copy.deepcopy(record) if record is not None else None

    def get_current_font_preference(self) -> FontPreferenceRecord | None:
        with self._lock:
            if self._current_font_preference_id is None:
                return None
            return self.get_font_preference(self._current_font_preference_id)

    def create_font_preference(
        self, font_family: str, font_size: int
    ) -> FontPreferenceRecord:
        with self._lock:
            record = FontPreferenceRecord(
                id=generate_uuid(), font_family=font_family, font_size=font_size
            )
            self._font_preferences[record.id] = record
            self._current_font_preference_id = record.id
            logger.info("Created font preference %s", record.id)
            return copy.deepcopy(record)

    def update_font_preference(
        self, preference_id: str, updates: dict[str, Any]
    ) -> FontPreferenceRecord:
        with self._lock:
            record = self._font_preferences.get(preference_id)
            if record is None:
                raise RecordNotFoundError("FontPreference", preference_id)
            for name in ("font_family", "font_size"):
                if name in updates:
                    setattr(record, name, updates[name])
            logger.info("Updated font preference %s", preference_id)
            return copy.deepcopy(record)

    def delete_font_preference(self, preference_id: str) -> bool:
        with self._lock:
            if self._font_preferences.pop(preference_id, None) is None:
                return False
            if self._current_font_preference_id == preference_id:
                self._current_font_preference_id = None
            logger.info("Deleted font preference %s", preference_id)
            return True


def _pick_preference_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Drop keys that aren't settable preference fields (id, user_id, timestamps)."""
    return {k: v for k, v in fields.items() if k in USER_PREFERENCE_FIELDS}
