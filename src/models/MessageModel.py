from .BaseDatamodel import BaseDatamodel
from .chat_room_DB.schemes import Message
from sqlalchemy import select


class MessageModel(BaseDatamodel):
    def __init__(self, db_client: object, realtime=None):
        super().__init__(db_client=db_client)
        self.db_client = db_client
        self.realtime = realtime

    async def get_by_id(self, message_id: int) -> Message | None:
        """Get one message by id."""
        async with self.db_client() as db_session:
            result = await db_session.execute(
                select(Message).where(Message.message_id == message_id)
            )
            return result.scalar_one_or_none()

    async def list_by_conversation(self, room_id: str, conversation_id: str) -> list[Message]:
        """List a whole conversation in chronological order (chat history in UI)."""
        async with self.db_client() as db_session:
            result = await db_session.execute(
                select(Message)
                .where(Message.room_id == room_id, Message.conversation_id == conversation_id)
                .order_by(Message.created_at.asc(), Message.message_id.asc())
            )
            return list(result.scalars().all())

    async def list_recent(self, room_id: str, conversation_id: str, limit: int = 20) -> list[Message]:
        """Last `limit` messages of a conversation, oldest first."""
        async with self.db_client() as db_session:
            result = await db_session.execute(
                select(Message)
                .where(Message.room_id == room_id, Message.conversation_id == conversation_id)
                .order_by(Message.created_at.desc(), Message.message_id.desc())
                .limit(limit)
            )
            rows = list(result.scalars().all())
        rows.reverse()
        return rows

    async def get_latest_in_room(self, room_id: str) -> Message | None:
        """Most recent message of the room, whatever conversation it belongs to."""
        async with self.db_client() as db_session:
            result = await db_session.execute(
                select(Message)
                .where(Message.room_id == room_id)
                .order_by(Message.created_at.desc(), Message.message_id.desc())
                .limit(1)
            )
            return result.scalar_one_or_none()

    async def create_message(self, message: Message) -> Message:
        """Store a user or agent message and notify realtime subscribers."""
        async with self.db_client() as db_session:
            async with db_session.begin():
                db_session.add(message)
            await db_session.refresh(message)
        if self.realtime is not None:
            self.realtime.publish(message)
        return message

    async def delete_message(self, message_id: int) -> bool:
        """Delete a message by id. Returns True if deleted."""
        async with self.db_client() as db_session:
            async with db_session.begin():
                result = await db_session.execute(
                    select(Message).where(Message.message_id == message_id)
                )
                message = result.scalar_one_or_none()
                if message is None:
                    return False
                await db_session.delete(message)
        return True
