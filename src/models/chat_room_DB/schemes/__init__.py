from .chat_room_base import SQLAlchemyBase
from .Messages import Message

__all__ = ["SQLAlchemyBase", "Message"]
