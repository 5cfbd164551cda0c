"""Font preference service - Stylist font family/size CRUD."""

import logging
from typing import Any, Optional

from storage.protocol import FontPreferenceStorage
from storage.records import FontPreferenceRecord

logger = logging.getLogger(__name__)


class FontPreferenceService:
    """Thin orchestrator over the font preference store.

    The store tracks a single "current" preference: the most recently
    created one, until it is deleted.
    """

    def __init__(self, storage: FontPreferenceStorage):
        self._storage = storage

    def get(self, preference_id: str) -> Optional[FontPreferenceRecord]:
        return self._storage.get_font_preference(preference_id)

    def get_current(self) -> Optional[FontPreferenceRecord]:
        return self._storage.get_current_font_preference()

    def create(self, font_family: str, font_size: int) -> FontPreferenceRecord:
        return self._storage.create_font_preference(font_family, font_size)

    def update(self, preference_id: str, changes: dict[str, Any]) -> FontPreferenceRecord:
        """Apply a partial update.

        Raises:
            RecordNotFoundError: The preference does not exist.
        """
        return self._storage.update_font_preference(preference_id, changes)

    def delete(self, preference_id: str) -> bool:
        return self._storage.delete_font_preference(preference_id)
