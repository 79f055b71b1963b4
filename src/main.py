import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from routes import api
from routes.schemes import HealthResponse

from helpers.config import get_settings, AgentConfig
from controllers.agent import ConversationAgent
from models.MessageModel import MessageModel
from models.chat_room_DB.schemes import SQLAlchemyBase
from stores.LLM import OpenAIProvider
from stores.Realtime import RealtimeChannel

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker


def _setup_logging():
    """Configure logging so agent and library loggers (e.g. OpenAI errors) show in the terminal."""
    try:
        level_name = get_settings().LOG_LEVEL.upper()
        level = getattr(logging, level_name, logging.INFO)
    except Exception:
        level = logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        root.addHandler(handler)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)  # optional: reduce access log noise
    logging.getLogger("httpx").setLevel(logging.WARNING)


_setup_logging()
logger = logging.getLogger(__name__)


def _build_openai_provider(settings) -> OpenAIProvider:
    # unset generation defaults keep the provider's own
    generation_defaults = {}
    if settings.GENERATION_DAFAULT_MAX_TOKENS is not None:
        generation_defaults["default_generation_max_output_tokens"] = settings.GENERATION_DAFAULT_MAX_TOKENS
    if settings.GENERATION_DAFAULT_TEMPERATURE is not None:
        generation_defaults["default_generation_temperature"] = settings.GENERATION_DAFAULT_TEMPERATURE
    provider = OpenAIProvider(
        api_key=settings.OPENAI_API_KEY,
        system_instruction=settings.AGENT_SYSTEM_PROMPT,
        **generation_defaults,
    )
    provider.set_generation_model(model_id=settings.GENERATION_MODEL_ID)
    return provider


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    postgres_conn = (
        f"postgresql+asyncpg://{settings.POSTGRES_USERNAME}:{settings.POSTGRES_PASSWORD}"
        f"@{settings.POSTGRES_HOST}:{settings.POSTGRES_PORT}/{settings.POSTGRES_MAIN_DATABASE}"
    )
    app.db_engine = create_async_engine(postgres_conn)
    if settings.DB_CREATE_SCHEMA:
        async with app.db_engine.begin() as conn:
            await conn.run_sync(SQLAlchemyBase.metadata.create_all)
    app.db_client = sessionmaker(
        app.db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    app.agent_config = AgentConfig.from_settings(settings)
    app.realtime = RealtimeChannel()
    app.openai_provider = _build_openai_provider(settings)

    app.agent = ConversationAgent(
        message_model=MessageModel(app.db_client, realtime=app.realtime),
        channel=app.realtime,
        provider=app.openai_provider,
        config=app.agent_config,
    )
    app.agent.start()
    logger.info("Application startup complete (DB, realtime channel and agent ready).")
    yield
    app.agent.stop()
    await app.realtime.join()
    await app.db_engine.dispose()
    logger.info("Application shutdown complete.")


app = FastAPI(title="Room Agent", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", summary="Liveness and agent connection state", response_model=HealthResponse)
async def health():
    agent = getattr(app, "agent", None)
    state = agent.state.value if agent is not None else "disconnected"
    return HealthResponse(agent=state)


@app.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Avoid 404 when the browser requests a favicon."""
    return Response(status_code=204)


app.include_router(api.api_router, prefix="/api/v1")
