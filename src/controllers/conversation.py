"""
Conversation: message history and posting human messages for the chat UI.
Bot replies are not produced here; storing a message publishes it and the room agent answers.
"""
from models.MessageModel import MessageModel
from models.chat_room_DB.schemes import Message


def _message_to_dict(m):
    return {
        "message_id": m.message_id,
        "room_id": m.room_id,
        "conversation_id": m.thread_id,
        "sender_id": m.sender_id,
        "content": m.content,
        "is_bot": bool(m.is_bot),
        "created_at": m.created_at.isoformat() if m.created_at else None,
    }


async def get_messages(db_client, room_id: str, conversation_id: str) -> list:
    """Get chronological message history for a conversation (chat history in UI)."""
    model = MessageModel(db_client)
    messages = await model.list_by_conversation(room_id, conversation_id)
    return [_message_to_dict(m) for m in messages]


async def post_user_message(db_client, realtime, room_id: str, sender_id: str, content: str,
                            conversation_id: str | None = None) -> dict:
    """Store a human message; subscribers on the realtime channel get notified."""
    model = MessageModel(db_client, realtime=realtime)
    message = Message(
        room_id=room_id,
        conversation_id=conversation_id or sender_id,
        sender_id=sender_id,
        content=content,
        is_bot=False,
    )
    await model.create_message(message)
    return _message_to_dict(message)


async def delete_message(db_client, room_id: str, message_id: int) -> bool:
    model = MessageModel(db_client)
    message = await model.get_by_id(message_id)
    if message is None or message.room_id != room_id:
        return False
    return await model.delete_message(message_id)
