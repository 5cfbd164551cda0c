"""Storage backends for preference, conversation and cache records."""

import logging

from config import settings
from storage.exceptions import RecordNotFoundError, StorageError
from storage.memory import MemoryStorage
from storage.protocol import FontPreferenceStorage, PerceptionStorage
from storage.sql import SqlStorage

logger = logging.getLogger(__name__)


def create_storage(backend: str | None = None) -> MemoryStorage | SqlStorage:
    """Build the storage backend named by ``backend`` (default: settings).

    The SQL backend creates its tables on first use.
    """
    backend = backend or settings.STORAGE_BACKEND
    if backend == "sql":
        from database import get_engine, get_session_local, init_db

        init_db(get_engine())
        logger.info("Using SQL storage backend")
        return SqlStorage(get_session_local())
    logger.info("Using in-memory storage backend")
    return MemoryStorage()


__all__ = [
    "FontPreferenceStorage",
    "MemoryStorage",
    "PerceptionStorage",
    "RecordNotFoundError",
    "SqlStorage",
    "StorageError",
    "create_storage",
]
