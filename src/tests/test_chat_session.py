"""
Tests for the chat session built by the OpenAI provider: role mapping, system instruction, failures.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from stores.LLM import OpenAIProvider, GenerationError


def _provider(reply="Sure thing."):
    provider = OpenAIProvider(api_key="sk-test", system_instruction="You are Alex.")
    provider.generate_chat = MagicMock(return_value=reply)
    return provider


def test_history_roles_are_mapped_for_openai():
    provider = _provider()
    chat = provider.start_chat([
        {"role": "user", "text": "hi"},
        {"role": "model", "text": "hello"},
    ])

    assert chat.send_message("what's new?") == "Sure thing."

    messages = provider.generate_chat.call_args.args[0]
    assert messages == [
        {"role": "system", "content": "You are Alex."},
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "hello"},
        {"role": "user", "content": "what's new?"},
    ]


def test_session_history_grows_after_reply():
    provider = _provider()
    chat = provider.start_chat([])
    chat.send_message("one")

    assert chat.history == [
        {"role": "user", "text": "one"},
        {"role": "model", "text": "Sure thing."},
    ]


def test_seed_history_is_copied():
    provider = _provider()
    seed = [{"role": "user", "text": "hi"}]
    chat = provider.start_chat(seed)
    chat.send_message("again")
    assert seed == [{"role": "user", "text": "hi"}]


def test_empty_completion_raises():
    provider = _provider(reply=None)
    chat = provider.start_chat([])
    with pytest.raises(GenerationError):
        chat.send_message("hello")
    assert chat.history == []


def test_generate_chat_without_model_returns_none():
    provider = OpenAIProvider(api_key="sk-test")
    provider.client = MagicMock()
    assert provider.generate_chat([{"role": "user", "content": "hi"}]) is None
    provider.client.chat.completions.create.assert_not_called()


def test_generate_chat_reads_first_choice():
    provider = OpenAIProvider(api_key="sk-test")
    provider.set_generation_model("gpt-4o-mini")
    provider.client = MagicMock()
    choice = MagicMock()
    choice.message.content = "Hi! ||| What's up?"
    provider.client.chat.completions.create.return_value = MagicMock(choices=[choice])

    assert provider.generate_chat([{"role": "user", "content": "hi"}]) == "Hi! ||| What's up?"
    kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["max_tokens"] == 1000


def test_explicit_zero_temperature_is_kept():
    provider = OpenAIProvider(api_key="sk-test", default_generation_temperature=0.0)
    provider.set_generation_model("gpt-4o-mini")
    provider.client = MagicMock()
    choice = MagicMock()
    choice.message.content = "ok"
    provider.client.chat.completions.create.return_value = MagicMock(choices=[choice])

    provider.generate_chat([{"role": "user", "content": "hi"}])

    assert provider.client.chat.completions.create.call_args.kwargs["temperature"] == 0.0


def test_unset_generation_settings_keep_provider_defaults():
    from main import _build_openai_provider

    settings = SimpleNamespace(
        OPENAI_API_KEY="sk-test",
        AGENT_SYSTEM_PROMPT="You are Alex.",
        GENERATION_MODEL_ID="gpt-4o-mini",
        GENERATION_DAFAULT_MAX_TOKENS=None,
        GENERATION_DAFAULT_TEMPERATURE=None,
    )
    provider = _build_openai_provider(settings)

    assert provider.default_generation_max_output_tokens == 1000
    assert provider.default_generation_temperature == 0.7
    assert provider.generation_model_id == "gpt-4o-mini"
    assert provider.system_instruction == "You are Alex."


def test_generation_settings_override_provider_defaults():
    from main import _build_openai_provider

    settings = SimpleNamespace(
        OPENAI_API_KEY="sk-test",
        AGENT_SYSTEM_PROMPT="You are Alex.",
        GENERATION_MODEL_ID="gpt-4o-mini",
        GENERATION_DAFAULT_MAX_TOKENS=256,
        GENERATION_DAFAULT_TEMPERATURE=0.0,
    )
    provider = _build_openai_provider(settings)

    assert provider.default_generation_max_output_tokens == 256
    assert provider.default_generation_temperature == 0.0
