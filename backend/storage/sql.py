"""SQLAlchemy storage backend.

Each public method runs in its own session and commits before returning.
Natural keys (``user_id``, ``image_url``) carry unique constraints; a
concurrent insert that loses the race gets an ``IntegrityError``, rolls back
and falls through to the update path.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from models import AltTextCacheEntry, ChatConversation, FontPreference, SystemSetting, UserPreferences
from models.utils import utc_now
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

CURRENT_FONT_PREFERENCE_KEY = "stylist.current_font_preference_id"


def _aware(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _message_to_json(message: ChatMessageRecord) -> dict:
    return {
        "role": message.role,
        "content": message.content,
        "timestamp": message.timestamp.isoformat(),
    }


def _message_from_json(data: dict) -> ChatMessageRecord:
    return ChatMessageRecord(
        role=data["role"],
        content=data["content"],
        timestamp=_aware(datetime.fromisoformat(data["timestamp"])),
    )


def _preferences_record(row: UserPreferences) -> UserPreferencesRecord:
    return UserPreferencesRecord(
        id=row.id,
        user_id=row.user_id,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        focus_mode=row.focus_mode,
        motion_blocker=row.motion_blocker,
        contrast_level=row.contrast_level,
        larger_click_targets=row.larger_click_targets,
        text_simplification=row.text_simplification,
        read_aloud=row.read_aloud,
        font_size=row.font_size,
        preferences=dict(row.preferences or {}),
    )


def _conversation_record(row: ChatConversation) -> ChatConversationRecord:
    return ChatConversationRecord(
        id=row.id,
        user_id=row.user_id,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        messages=[_message_from_json(m) for m in row.messages or []],
    )


def _alt_text_record(row: AltTextCacheEntry) -> AltTextCacheRecord:
    return AltTextCacheRecord(
        id=row.id,
        image_url=row.image_url,
        alt_text=row.alt_text,
        created_at=_aware(row.created_at),
    )


def _font_preference_record(row: FontPreference) -> FontPreferenceRecord:
    return FontPreferenceRecord(
        id=row.id, font_family=row.font_family, font_size=row.font_size
    )


class SqlStorage:
    """SQLAlchemy-backed implementation of both storage protocols."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    @property
    def backend_name(self) -> str:
        return "sql"

    # --- user preferences ---

    @staticmethod
    def _find_preferences(db: Session, user_id: str) -> UserPreferences | None:
        return (
            db.query(UserPreferences)
            .filter(UserPreferences.user_id == user_id)
            .first()
        )

    def get_user_preferences(self, user_id: str) -> UserPreferencesRecord | None:
        with self._session_factory() as db:
            row = self._find_preferences(db, user_id)
            return _preferences_record(row) if row is not None else None

    def create_user_preferences(
        self, user_id: str, **fields: Any
    ) -> UserPreferencesRecord:
        values = {k: v for k, v in fields.items() if k in USER_PREFERENCE_FIELDS}
        with self._session_factory() as db:
            if self._find_preferences(db, user_id) is None:
                row = UserPreferences(user_id=user_id, **values)
                db.add(row)
                try:
                    db.commit()
                except IntegrityError:
                    db.rollback()
                    logger.info(
                        "Preferences for user %s created concurrently; updating", user_id
                    )
                else:
                    db.refresh(row)
                    logger.info("Created preferences for user %s", user_id)
                    return _preferences_record(row)
        return self.update_user_preferences(user_id, values)

    def get_or_create_user_preferences(
        self, user_id: str
    ) -> tuple[UserPreferencesRecord, bool]:
        existing = self.get_user_preferences(user_id)
        if existing is not None:
            return existing, False

        with self._session_factory() as db:
            row = UserPreferences(user_id=user_id)
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                row = self._find_preferences(db, user_id)
                return _preferences_record(row), False
            db.refresh(row)
            logger.info("Created preferences for user %s", user_id)
            return _preferences_record(row), True

    def update_user_preferences(
        self, user_id: str, updates: dict[str, Any]
    ) -> UserPreferencesRecord:
        with self._session_factory() as db:
            row = self._find_preferences(db, user_id)
            if row is None:
                raise RecordNotFoundError("UserPreferences", user_id)
            for name, value in updates.items():
                if name in USER_PREFERENCE_FIELDS:
                    setattr(row, name, value)
            # Explicit bump: onupdate doesn't fire when no column changed
            row.updated_at = utc_now()
            db.commit()
            db.refresh(row)
            logger.info("Updated preferences for user %s", user_id)
            return _preferences_record(row)

    # --- chat conversations ---

    def get_conversation(self, conversation_id: str) -> ChatConversationRecord | None:
        with self._session_factory() as db:
            row = db.get(ChatConversation, conversation_id)
            return _conversation_record(row) if row is not None else None

    def list_conversations(self, user_id: str) -> list[ChatConversationRecord]:
        with self._session_factory() as db:
            rows = (
                db.query(ChatConversation)
                .filter(ChatConversation.user_id == user_id)
                .order_by(ChatConversation.created_at)
                .all()
            )
            return [_conversation_record(row) for row in rows]

    def create_conversation(
        self, user_id: str, messages: list[ChatMessageRecord] | None = None
    ) -> ChatConversationRecord:
        with self._session_factory() as db:
            row = ChatConversation(
                user_id=user_id,
                messages=[_message_to_json(m) for m in messages or []],
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            logger.info("Created conversation %s for user %s", row.id, user_id)
            return _conversation_record(row)

    def append_messages(
        self, conversation_id: str, messages: list[ChatMessageRecord]
    ) -> ChatConversationRecord:
        with self._session_factory() as db:
            row = (
                db.query(ChatConversation)
                .filter(ChatConversation.id == conversation_id)
                .with_for_update()
                .first()
            )
            if row is None:
                raise RecordNotFoundError("ChatConversation", conversation_id)
            # Reassign so the JSON column is marked dirty
            row.messages = list(row.messages or []) + [
                _message_to_json(m) for m in messages
            ]
            row.updated_at = utc_now()
            db.commit()
            db.refresh(row)
            return _conversation_record(row)

    # --- alt text cache ---

    def get_alt_text(self, image_url: str) -> AltTextCacheRecord | None:
        with self._session_factory() as db:
            row = (
                db.query(AltTextCacheEntry)
                .filter(AltTextCacheEntry.image_url == image_url)
                .first()
            )
            return _alt_text_record(row) if row is not None else None

    def cache_alt_text(self, image_url: str, alt_text: str) -> AltTextCacheRecord:
        with self._session_factory() as db:
            row = (
                db.query(AltTextCacheEntry)
                .filter(AltTextCacheEntry.image_url == image_url)
                .first()
            )
            if row is None:
                row = AltTextCacheEntry(image_url=image_url, alt_text=alt_text)
                db.add(row)
                try:
                    db.commit()
                except IntegrityError:
                    db.rollback()
                    row = (
                        db.query(AltTextCacheEntry)
                        .filter(AltTextCacheEntry.image_url == image_url)
                        .first()
                    )
                    row.alt_text = alt_text
                    db.commit()
            else:
                row.alt_text = alt_text
                db.commit()
            db.refresh(row)
            return _alt_text_record(row)

    # --- font preferences ---

    def get_font_preference(self, preference_id: str) -> FontPreferenceRecord | None:
        with self._session_factory() as db:
            row = db.get(FontPreference, preference_id)
            return _font_preference_record(row) if row is not None else None

    @staticmethod
    def _current_pointer(db: Session) -> SystemSetting | None:
        return (
            db.query(SystemSetting)
            .filter(SystemSetting.key == CURRENT_FONT_PREFERENCE_KEY)
            .first()
        )

    def get_current_font_preference(self) -> FontPreferenceRecord | None:
        with self._session_factory() as db:
            pointer = self._current_pointer(db)
            if pointer is None:
                return None
            current_id = json.loads(pointer.value)
            if current_id is None:
                return None
            row = db.get(FontPreference, current_id)
            return _font_preference_record(row) if row is not None else None

    def create_font_preference(
        self, font_family: str, font_size: int
    ) -> FontPreferenceRecord:
        with self._session_factory() as db:
            row = FontPreference(font_family=font_family, font_size=font_size)
            db.add(row)
            db.commit()
            db.refresh(row)
            record = _font_preference_record(row)
        self._set_current_pointer(record.id)
        logger.info("Created font preference %s", record.id)
        return record

    def _set_current_pointer(self, preference_id: str) -> None:
        value = json.dumps(preference_id)
        with self._session_factory() as db:
            pointer = self._current_pointer(db)
            if pointer is None:
                db.add(SystemSetting(key=CURRENT_FONT_PREFERENCE_KEY, value=value))
                try:
                    db.commit()
                    return
                except IntegrityError:
                    # Another first create inserted the pointer row
                    db.rollback()
                    pointer = self._current_pointer(db)
            pointer.value = value
            db.commit()

    def update_font_preference(
        self, preference_id: str, updates: dict[str, Any]
    ) -> FontPreferenceRecord:
        with self._session_factory() as db:
            row = db.get(FontPreference, preference_id)
            if row is None:
                raise RecordNotFoundError("FontPreference", preference_id)
            for name in ("font_family", "font_size"):
                if name in updates:
                    setattr(row, name, updates[name])
            db.commit()
            db.refresh(row)
            logger.info("Updated font preference %s", preference_id)
            return _font_preference_record(row)

    def delete_font_preference(self, preference_id: str) -> bool:
        with self._session_factory() as db:
            row = db.get(FontPreference, preference_id)
            if row is None:
                return False
            db.delete(row)
            pointer = self._current_pointer(db)
            if pointer is not None and json.loads(pointer.value) == preference_id:
                pointer.value = json.dumps(None)
            db.commit()
            logger.info("Deleted font preference %s", preference_id)
            return True
