"""FontPreference model - Stylist font family and size."""

from sqlalchemy import Column, Integer, String

from database import Base
from models.utils import generate_uuid


class FontPreference(Base):
    __tablename__ = "font_preferences"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    font_family = Column(String, nullable=False)
    font_size = Column(Integer, nullable=False)  # px
