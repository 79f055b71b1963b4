from .OpenAIProvider import OpenAIProvider
from .ChatSession import ChatSession, GenerationError

__all__ = ["OpenAIProvider", "ChatSession", "GenerationError"]
