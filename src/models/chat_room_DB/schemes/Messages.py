from .chat_room_base import SQLAlchemyBase
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy import Index


class Message(SQLAlchemyBase):
    __tablename__ = "messages"

    message_id = Column(Integer, primary_key=True, autoincrement=True)
    room_id = Column(String(64), nullable=False)
    conversation_id = Column(String(255), nullable=True)  # NULL on legacy rows
    sender_id = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    is_bot = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_message_room_id", "room_id"),
        Index("idx_message_room_conversation", "room_id", "conversation_id"),
    )

    @property
    def thread_id(self) -> str:
        """Conversation the message belongs to; legacy rows fall back to the sender."""
        return self.conversation_id or self.sender_id
