"""
Shared pytest fixtures: in-memory SQLite database, realtime channel, mock generation provider,
FastAPI test client.
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock, AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

src_dir = Path(__file__).resolve().parent.parent
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from helpers.config import AgentConfig
from models.MessageModel import MessageModel
from models.chat_room_DB.schemes import SQLAlchemyBase
from stores.Realtime import RealtimeChannel


@pytest_asyncio.fixture()
async def db_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(SQLAlchemyBase.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLAlchemyBase.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture()
async def db_session_factory(db_engine):
    return sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
def agent_config():
    return AgentConfig()


@pytest_asyncio.fixture()
async def realtime():
    channel = RealtimeChannel()
    yield channel
    channel.unsubscribe()
    await channel.join()


@pytest_asyncio.fixture()
async def message_model(db_session_factory, realtime):
    return MessageModel(db_session_factory, realtime=realtime)


def make_mock_provider(reply="Hello from the assistant!"):
    provider = MagicMock()
    chat = MagicMock()
    chat.send_message.return_value = reply
    provider.start_chat.return_value = chat
    return provider


@pytest.fixture()
def provider():
    return make_mock_provider()


@pytest.fixture()
def fake_sleep():
    return AsyncMock()


@pytest_asyncio.fixture()
async def app(db_session_factory, realtime, agent_config):
    from main import app as fastapi_app

    fastapi_app.db_client = db_session_factory
    fastapi_app.realtime = realtime
    fastapi_app.agent_config = agent_config
    return fastapi_app


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
