from ..LLMEnums import OpenAIEnums, HistoryRoleEnums


class GenerationError(Exception):
    """Raised when the model produced no usable completion."""


class ChatSession():
    """Stateful chat seeded with ordered history turns ({"role": "user"|"model", "text": ...})."""

    def __init__(self, provider, history: list[dict], system_instruction: str = None):
        self.provider = provider
        self.system_instruction = system_instruction
        self.history = list(history or [])

    def to_openai_messages(self) -> list[dict]:
        out = []
        if self.system_instruction:
            out.append(self.provider.construct_prompt(self.system_instruction, OpenAIEnums.ROLE_SYSTEM.value))
        for turn in self.history:
            role = OpenAIEnums.ROLE_ASSISTANT.value if turn["role"] == HistoryRoleEnums.MODEL.value else OpenAIEnums.ROLE_USER.value
            out.append(self.provider.construct_prompt(turn["text"], role))
        return out

    def send_message(self, text: str) -> str:
        messages = self.to_openai_messages()
        messages.append(self.provider.construct_prompt(text, OpenAIEnums.ROLE_USER.value))
        reply = self.provider.generate_chat(messages)
        if reply is None:
            raise GenerationError("Model returned no completion")
        self.history.append({"role": HistoryRoleEnums.USER.value, "text": text})
        self.history.append({"role": HistoryRoleEnums.MODEL.value, "text": reply})
        return reply
