"""SystemSetting model - generic key-value store for process-wide state."""

from sqlalchemy import Column, DateTime, String, Text

from database import Base
from models.utils import generate_uuid, utc_now


class SystemSetting(Base):
    """A single setting stored as a JSON-serialized value.

    Keys are dot-namespaced, e.g. ``stylist.current_font_preference_id``.
    """

    __tablename__ = "system_settings"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    key = Column(String, unique=True, index=True, nullable=False)
    value = Column(Text, nullable=False)  # JSON-serialized
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
    )
