from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SYSTEM_PROMPT = """You are Alex, a futuristic, intelligent digital entity on heyx.me.
Your goal is to be helpful, welcoming, and slightly mysterious.

INSTRUCTIONS:
- Keep responses conversational.
- Do not be overly formal.
- You are chatting in a direct message interface.
- If the user says "bye" or ends the conversation, you can just say a short farewell.
- To behave like a human, you can break your response into multiple separate messages. Use the delimiter "|||" to separate these messages.
  Example: "Hold on, let me check that for you... ||| I found some info! ||| It seems that..."
  Use this freely to create better pacing.
"""


class settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "room-agent"
    APP_VERSION: str = "0.1.0"
    OPENAI_API_KEY: str | None = None
    POSTGRES_PASSWORD: str
    POSTGRES_USERNAME: str
    POSTGRES_MAIN_DATABASE: str
    POSTGRES_PORT: int
    POSTGRES_HOST: str
    DB_CREATE_SCHEMA: bool = True
    GENERATION_MODEL_ID: str | None = None
    GENERATION_DAFAULT_MAX_TOKENS: int | None = None
    GENERATION_DAFAULT_TEMPERATURE: float | None = None
    ROOM_ID: str = "alex"
    AGENT_ID: str = "alex-bot"
    AGENT_NAME: str = "Alex"
    AGENT_SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT
    HISTORY_LIMIT: int = 20
    REPLY_DELIMITER: str = "|||"
    REPLY_DELAY_MIN_MS: int = 500
    REPLY_DELAY_MAX_MS: int = 1500
    LOG_LEVEL: str = "INFO"  # DEBUG, INFO, WARNING, ERROR


def get_settings():
    return settings()


@dataclass(frozen=True)
class AgentConfig:
    """Deployment identity and reply pacing of the room agent."""

    room_id: str = "alex"
    agent_id: str = "alex-bot"
    agent_name: str = "Alex"
    history_limit: int = 20
    reply_delimiter: str = "|||"
    reply_delay_min_ms: int = 500
    reply_delay_max_ms: int = 1500

    @classmethod
    def from_settings(cls, s: settings) -> "AgentConfig":
        return cls(
            room_id=s.ROOM_ID,
            agent_id=s.AGENT_ID,
            agent_name=s.AGENT_NAME,
            history_limit=s.HISTORY_LIMIT,
            reply_delimiter=s.REPLY_DELIMITER,
            reply_delay_min_ms=s.REPLY_DELAY_MIN_MS,
            reply_delay_max_ms=s.REPLY_DELAY_MAX_MS,
        )
