"""API route handlers."""
from . import accessibility, chat, font_preferences, preferences

__all__ = ["accessibility", "chat", "font_preferences", "preferences"]
