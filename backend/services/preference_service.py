"""Preference service - user accessibility preferences and font-size control."""

import logging
from dataclasses import dataclass
from typing import Any

from storage.protocol import PerceptionStorage
from storage.records import DEFAULT_FONT_SIZE, UserPreferencesRecord

logger = logging.getLogger(__name__)

FONT_SIZE_MIN = 50
FONT_SIZE_MAX = 300
FONT_SIZE_STEP = 10
FONT_SIZE_DEFAULT = int(DEFAULT_FONT_SIZE)


@dataclass
class FontSizeAdjustment:
    """Result of applying a font-size action."""

    action: str
    previous_size: int
    font_size: int

    @property
    def percentage(self) -> str:
        return f"{self.font_size}%"


def compute_font_size(current: int, action: str, value: float | None = None) -> int:
    """Apply a font-size action with saturating arithmetic.

    ``increase``/``decrease`` move by 10 within [50, 300], ``set`` clamps
    ``value`` into range (no value leaves the size unchanged), and ``reset``
    returns to 100.
    """
    if action == "increase":
        return min(current + FONT_SIZE_STEP, FONT_SIZE_MAX)
    if action == "decrease":
        return max(current - FONT_SIZE_STEP, FONT_SIZE_MIN)
    if action == "set":
        if value is None:
            return current
        return max(FONT_SIZE_MIN, min(int(value), FONT_SIZE_MAX))
    if action == "reset":
        return FONT_SIZE_DEFAULT
    raise ValueError(f"Unknown font size action: {action!r}")


def parse_font_size(record: UserPreferencesRecord) -> int:
    """Read the stored percentage, falling back to 100 for unparseable values."""
    try:
        return int(record.font_size or DEFAULT_FONT_SIZE)
    except ValueError:
        logger.warning(
            "Invalid stored font size %r for user %s; using default",
            record.font_size, record.user_id,
        )
        return FONT_SIZE_DEFAULT


class PreferenceService:
    """Service for reading and updating per-user accessibility preferences.

    Every read is a get-or-create: a user with no record gets a default one
    persisted on first access.
    """

    def __init__(self, storage: PerceptionStorage):
        self._storage = storage

    def get_or_create(self, user_id: str) -> UserPreferencesRecord:
        """Return the user's preferences, creating defaults if missing."""
        record, created = self._storage.get_or_create_user_preferences(user_id)
        if created:
            logger.info("Initialized default preferences for user %s", user_id)
        return record

    def update(self, user_id: str, changes: dict[str, Any]) -> UserPreferencesRecord:
        """Apply a partial update, creating the record from ``changes`` if missing."""
        if self._storage.get_user_preferences(user_id) is None:
            return self._storage.create_user_preferences(user_id, **changes)
        return self._storage.update_user_preferences(user_id, changes)

    def get_font_size(self, user_id: str) -> int:
        """Return the user's font size percentage."""
        return parse_font_size(self.get_or_create(user_id))

    def adjust_font_size(
        self, user_id: str, action: str, value: float | None = None
    ) -> FontSizeAdjustment:
        """Apply a font-size action to the user's stored percentage."""
        previous = parse_font_size(self.get_or_create(user_id))
        new_size = compute_font_size(previous, action, value)
        self._storage.update_user_preferences(user_id, {"font_size": str(new_size)})
        logger.debug(
            "Font size for user %s: %s %d -> %d", user_id, action, previous, new_size
        )
        return FontSizeAdjustment(action=action, previous_size=previous, font_size=new_size)
