"""Storage protocol definitions.

Two protocols cover the two services: ``PerceptionStorage`` for the
assistant service and ``FontPreferenceStorage`` for the Stylist service.
Both :class:`~storage.memory.MemoryStorage` and
:class:`~storage.sql.SqlStorage` implement both.
"""

from typing import Any, Protocol

from storage.records import (
    AltTextCacheRecord,
    ChatConversationRecord,
    ChatMessageRecord,
    FontPreferenceRecord,
    UserPreferencesRecord,
)


class PerceptionStorage(Protocol):
    """Store for user preferences, chat conversations and the alt-text cache."""

    def get_user_preferences(self, user_id: str) -> UserPreferencesRecord | None:
        """Return the preferences for ``user_id``, or None."""
        ...

    def create_user_preferences(
        self, user_id: str, **fields: Any
    ) -> UserPreferencesRecord:
        """Create preferences for ``user_id``, applying defaults for omitted fields.

        If a record already exists for ``user_id`` it is updated with
        ``fields`` instead, so there is never more than one per user.
        """
        ...

    def get_or_create_user_preferences(
        self, user_id: str
    ) -> tuple[UserPreferencesRecord, bool]:
        """Return ``(record, created)``, creating a default record if missing."""
        ...

    def update_user_preferences(
        self, user_id: str, updates: dict[str, Any]
    ) -> UserPreferencesRecord:
        """Merge ``updates`` into the existing record and bump ``updated_at``.

        Raises:
            RecordNotFoundError: No preferences exist for ``user_id``.
        """
        ...

    def get_conversation(self, conversation_id: str) -> ChatConversationRecord | None:
        ...

    def list_conversations(self, user_id: str) -> list[ChatConversationRecord]:
        """Return all conversations for ``user_id`` in creation order."""
        ...

    def create_conversation(
        self, user_id: str, messages: list[ChatMessageRecord] | None = None
    ) -> ChatConversationRecord:
        ...

    def append_messages(
        self, conversation_id: str, messages: list[ChatMessageRecord]
    ) -> ChatConversationRecord:
        """Append ``messages`` to a conversation in one store operation.

        Raises:
            RecordNotFoundError: The conversation does not exist.
        """
        ...

    def get_alt_text(self, image_url: str) -> AltTextCacheRecord | None:
        """Return the cached alt text for an exact image URL, or None."""
        ...

    def cache_alt_text(self, image_url: str, alt_text: str) -> AltTextCacheRecord:
        """Store alt text for ``image_url``, replacing any previous entry."""
        ...


class FontPreferenceStorage(Protocol):
    """Store for Stylist font preferences and the current-preference pointer."""

    def get_font_preference(self, preference_id: str) -> FontPreferenceRecord | None:
        ...

    def get_current_font_preference(self) -> FontPreferenceRecord | None:
        """Return the most recently created preference, unless it was deleted."""
        ...

    def create_font_preference(
        self, font_family: str, font_size: int
    ) -> FontPreferenceRecord:
        """Create a preference and make it the current one."""
        ...

    def update_font_preference(
        self, preference_id: str, updates: dict[str, Any]
    ) -> FontPreferenceRecord:
        """Merge ``updates`` into an existing preference.

        Raises:
            RecordNotFoundError: The preference does not exist.
        """
        ...

    def delete_font_preference(self, preference_id: str) -> bool:
        """Delete a preference. Returns False if it didn't exist."""
        ...
