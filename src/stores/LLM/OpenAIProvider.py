import logging

from openai import OpenAI

from .ChatSession import ChatSession

class OpenAIProvider():

    def __init__(self, api_key: str,
                default_generation_max_output_tokens: int = 1000,
                default_generation_temperature: float = 0.7,
                system_instruction: str = None):
        self.api_key = api_key
        self.default_generation_max_output_tokens = default_generation_max_output_tokens
        self.default_generation_temperature = default_generation_temperature
        self.generation_model_id = None
        self.system_instruction = system_instruction

        self.client = OpenAI(api_key=api_key or "")

        self.logger = logging.getLogger(__name__)

    def set_generation_model(self, model_id: str):
        self.generation_model_id = model_id # this will allow dynamic model selection while run time

    def start_chat(self, history: list[dict]) -> ChatSession:
        """Open a chat seeded with ordered turns, oldest first."""
        return ChatSession(self, history, system_instruction=self.system_instruction)

    def generate_chat(
        self,
        messages: list[dict],
        max_output_tokens: int = None,
        temperature: float = None,
    ) -> str | None:
        """Generate assistant reply given full conversation history (for chat with context)."""
        if not self.client:
            self.logger.error("OpenAI client is not initialized.")
            return None
        if not self.generation_model_id:
            self.logger.error("Generation model for OpenAI was not set.")
            return None
        if max_output_tokens is None:
            max_output_tokens = self.default_generation_max_output_tokens
        if temperature is None:
            temperature = self.default_generation_temperature
        response = self.client.chat.completions.create(
            model=self.generation_model_id,
            messages=messages,
            max_tokens=max_output_tokens,
            temperature=temperature,
        )
        if not response or not response.choices or len(response.choices) == 0 or not response.choices[0].message:
            self.logger.error("Error while generating chat with OpenAI.")
            return None
        msg = response.choices[0].message
        return getattr(msg, "content", None) or (msg.model_dump().get("content") if hasattr(msg, "model_dump") else None)

    def construct_prompt(self, prompt: str, role: str):
        # for openai we can use system role to set the behavior of the model
        return {
            "role": role,
            "content": prompt
        }
