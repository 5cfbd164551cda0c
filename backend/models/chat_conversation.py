"""ChatConversation model - assistant chat history for a user."""

from sqlalchemy import JSON, Column, DateTime, String

from database import Base
from models.utils import generate_uuid, utc_now


class ChatConversation(Base):
    """An ordered list of chat turns between a user and the assistant."""

    __tablename__ = "chat_conversations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, index=True, nullable=False)
    # List of {"role", "content", "timestamp"} dicts, timestamp as ISO string
    messages = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
    )
