"""UserPreferences model - accessibility settings for one extension user."""

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from database import Base
from models.utils import generate_uuid, utc_now


class UserPreferences(Base):
    """Accessibility toggles and display settings keyed by the client's user id."""

    __tablename__ = "user_preferences"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, unique=True, index=True, nullable=False)
    focus_mode = Column(Boolean, default=False, nullable=False)
    motion_blocker = Column(Boolean, default=False, nullable=False)
    contrast_level = Column(String, default="normal", nullable=False)
    larger_click_targets = Column(Boolean, default=False, nullable=False)
    text_simplification = Column(Boolean, default=False, nullable=False)
    read_aloud = Column(Boolean, default=False, nullable=False)
    font_size = Column(String, default="100", nullable=False)  # percentage, e.g. "120"
    preferences = Column(JSON, default=dict, nullable=False)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
    )
