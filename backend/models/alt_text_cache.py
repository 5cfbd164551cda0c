"""AltTextCacheEntry model - generated image descriptions keyed by URL."""

from sqlalchemy import Column, DateTime, String, Text

from database import Base
from models.utils import generate_uuid, utc_now


class AltTextCacheEntry(Base):
    """Cached alt text for a single image URL."""

    __tablename__ = "alt_text_cache"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    image_url = Column(Text, unique=True, nullable=False)
    alt_text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utc_now)
