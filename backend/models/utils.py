"""Shared helpers for ORM models and the storage backends."""

import uuid
from datetime import datetime, timezone


def generate_uuid() -> str:
    """Generate a UUID string (record primary keys)."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Current time as an aware UTC datetime; all stored timestamps use this."""
    return datetime.now(timezone.utc)
