"""
Room agent: answers every new human message in its room.

Flow per inserted message:
- ignore messages written by the agent itself
- load the last messages of the conversation as user/model turns
- ask the model for a reply, split it on the delimiter
- store each fragment as a bot message, pacing multi-part replies
On the first SUBSCRIBED signal the agent also answers the latest room message
if it is still unanswered (only that single message is inspected).
"""
import asyncio
import logging
import random
from enum import Enum

from sqlalchemy.exc import SQLAlchemyError

from helpers.config import AgentConfig
from models.chat_room_DB.schemes import Message
from stores.LLMEnums import HistoryRoleEnums
from stores.RealtimeEnums import RealtimeStatusEnums

logger = logging.getLogger(__name__)

# asyncpg surfaces dropped or refused connections as raw OSErrors
STORE_ERRORS = (SQLAlchemyError, OSError)


class AgentState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


def split_reply(text: str, delimiter: str = "|||") -> list[str]:
    """Split a completion into trimmed, non-empty message fragments."""
    if not text:
        return []
    return [part.strip() for part in text.split(delimiter) if part.strip()]


def message_to_turn(message: Message, agent_id: str) -> dict:
    role = HistoryRoleEnums.MODEL if message.sender_id == agent_id else HistoryRoleEnums.USER
    return {"role": role.value, "text": message.content}


class ConversationAgent:
    """Reply loop over a message store, a realtime channel and a generation provider.

    Parameters
    ----------
    message_model:
        Store exposing ``list_recent``, ``get_latest_in_room`` and ``create_message``.
    channel:
        Realtime channel emitting inserted messages and connection status.
    provider:
        Generation provider exposing ``start_chat(history)`` whose session has
        ``send_message(text) -> str``.
    config:
        Immutable room and identity settings.
    sleep, rng:
        Pacing hooks; default to ``asyncio.sleep`` and the ``random`` module.
    """

    def __init__(self, message_model, channel, provider, config: AgentConfig, sleep=None, rng=None):
        self.message_model = message_model
        self.channel = channel
        self.provider = provider
        self.config = config
        self.sleep = sleep or asyncio.sleep
        self.rng = rng or random
        self.state = AgentState.DISCONNECTED
        self._reconciled = False

    @property
    def tag(self) -> str:
        return f"[{self.config.agent_name}]"

    def start(self):
        logger.info("%s Agent starting...", self.tag)
        self.channel.on_insert(self.config.room_id, self.handle_new_message)
        self.channel.subscribe(self._on_status)

    def stop(self):
        self.channel.unsubscribe()
        self.state = AgentState.DISCONNECTED

    async def _on_status(self, status):
        if status != RealtimeStatusEnums.SUBSCRIBED:
            logger.info("%s Realtime status: %s", self.tag, getattr(status, "value", status))
            return
        if self._reconciled:
            return
        self.state = AgentState.CONNECTED
        self._reconciled = True
        logger.info("%s Realtime connected.", self.tag)
        await self.check_missed_messages()

    async def fetch_history(self, conversation_id: str) -> list[dict]:
        """Recent turns of a conversation, oldest first. Read errors yield no history."""
        try:
            rows = await self.message_model.list_recent(
                self.config.room_id, conversation_id, self.config.history_limit
            )
        except STORE_ERRORS as e:
            logger.error("%s Error fetching history: %s", self.tag, e)
            return []
        return [message_to_turn(m, self.config.agent_id) for m in rows]

    async def handle_new_message(self, message: Message):
        if message.sender_id == self.config.agent_id:
            return

        conversation_id = message.conversation_id or message.sender_id
        logger.info("%s New msg from %s in thread %s", self.tag, message.sender_id, conversation_id)

        history = await self.fetch_history(conversation_id)

        # the triggering row comes back as the tail of the fetched history
        if history:
            last = history[-1]
            if last["role"] == HistoryRoleEnums.USER.value and last["text"] == message.content:
                history.pop()

        await self.generate_and_send(message.content, history, conversation_id)

    async def check_missed_messages(self):
        logger.info("%s Checking for latest missed activity...", self.tag)
        try:
            last_msg = await self.message_model.get_latest_in_room(self.config.room_id)
        except STORE_ERRORS as e:
            logger.error("%s Error fetching latest message: %s", self.tag, e)
            return

        if last_msg is None or last_msg.sender_id == self.config.agent_id:
            return

        conversation_id = last_msg.conversation_id or last_msg.sender_id
        logger.info("%s Found unanswered message in thread %s", self.tag, conversation_id)

        history = await self.fetch_history(conversation_id)
        await self.generate_and_send(last_msg.content, history[:-1], conversation_id)

    def reply_delay(self) -> float:
        """Seconds to wait before a fragment, uniform in [min, max)."""
        low = self.config.reply_delay_min_ms
        high = self.config.reply_delay_max_ms
        return (low + self.rng.random() * (high - low)) / 1000.0

    async def generate_and_send(self, prompt: str, history: list[dict], conversation_id: str):
        try:
            chat = self.provider.start_chat(history)
            logger.info("%s Thinking for convo %s... Context: %d", self.tag, conversation_id, len(history))
            response_text = await asyncio.to_thread(chat.send_message, prompt)
        except Exception:
            logger.exception("%s Generation failed for convo %s", self.tag, conversation_id)
            return

        logger.info("%s Replying to %s", self.tag, conversation_id)
        fragments = split_reply(response_text, self.config.reply_delimiter)

        for content in fragments:
            if len(fragments) > 1:
                await self.sleep(self.reply_delay())
            try:
                await self.message_model.create_message(
                    Message(
                        room_id=self.config.room_id,
                        conversation_id=conversation_id,
                        sender_id=self.config.agent_id,
                        content=content,
                        is_bot=True,
                    )
                )
            except STORE_ERRORS as e:
                logger.error("%s Error sending to DB: %s", self.tag, e)
