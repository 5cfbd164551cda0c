"""Shared FastAPI dependencies.

The store and the completion provider are process-wide singletons; tests
replace them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from integrations.completion_protocol import CompletionProvider
from integrations.openai_client import OpenAIClient
from services.accessibility_service import AccessibilityService
from services.chat_service import ChatService
from services.font_preference_service import FontPreferenceService
from services.preference_service import PreferenceService
from storage import MemoryStorage, SqlStorage, create_storage


@lru_cache
def get_storage() -> MemoryStorage | SqlStorage:
    """Get the configured storage backend (created once per process)."""
    return create_storage()


@lru_cache
def get_completion_provider() -> CompletionProvider:
    """Get the completion provider (created once per process)."""
    return OpenAIClient()


def get_preference_service(storage=Depends(get_storage)) -> PreferenceService:
    return PreferenceService(storage)


def get_chat_service(
    provider=Depends(get_completion_provider),
    storage=Depends(get_storage),
) -> ChatService:
    return ChatService(provider, storage)


def get_accessibility_service(
    provider=Depends(get_completion_provider),
    storage=Depends(get_storage),
) -> AccessibilityService:
    return AccessibilityService(provider, storage)


def get_font_preference_service(storage=Depends(get_storage)) -> FontPreferenceService:
    return FontPreferenceService(storage)
