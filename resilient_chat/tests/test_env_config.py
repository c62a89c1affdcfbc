from __future__ import annotations

import pytest

from resilient_chat.base.timeouts import get_timeout_config
from resilient_chat.config import ConnectionConfig, get_connection_config
from resilient_chat.config.defaults import CHAT_COMPLETION_ENDPOINT, DEFAULT_MODEL
from resilient_chat.config.env import is_placeholder, resolve_api_key


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "RESILIENT_CHAT_ENDPOINT",
        "RESILIENT_CHAT_MODEL",
        "RESILIENT_CHAT_MAX_MEMORY",
        "RESILIENT_CHAT_TIMEOUT_CONNECT_SECONDS",
        "RESILIENT_CHAT_TIMEOUT_HTTP_SECONDS",
        "RESILIENT_CHAT_TIMEOUT_STREAM_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")
    assert is_placeholder("ChangeMe123")
    assert is_placeholder("example-key")
    assert is_placeholder("test_token")
    assert not is_placeholder("sk-real-value")
    assert not is_placeholder(None)


def test_resolve_api_key(monkeypatch):
    assert resolve_api_key() == (None, None)
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-live  ")
    assert resolve_api_key() == ("sk-live", "OPENAI_API_KEY")
    monkeypatch.setenv("OPENAI_API_KEY", "changeme")
    assert resolve_api_key() == (None, None)


def test_defaults_without_environment():
    cfg = get_connection_config()
    assert cfg == ConnectionConfig()
    assert cfg.endpoint == CHAT_COMPLETION_ENDPOINT
    assert cfg.model == DEFAULT_MODEL


def test_environment_then_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("RESILIENT_CHAT_ENDPOINT", "https://proxy/v1/chat/completions")
    monkeypatch.setenv("RESILIENT_CHAT_MODEL", "gpt-4")
    monkeypatch.setenv("RESILIENT_CHAT_MAX_MEMORY", "25")

    cfg = get_connection_config({"model": "gpt-4-32k", "endpoint": None})

    assert cfg.api_key == "sk-env"
    assert cfg.endpoint == "https://proxy/v1/chat/completions"
    assert cfg.model == "gpt-4-32k"
    assert cfg.max_memory_messages == 25


@pytest.mark.parametrize("raw", ["0", "-3", "many"])
def test_invalid_memory_size_falls_back(monkeypatch, raw):
    monkeypatch.setenv("RESILIENT_CHAT_MAX_MEMORY", raw)
    assert get_connection_config().max_memory_messages == ConnectionConfig().max_memory_messages


def test_unknown_override_is_rejected():
    with pytest.raises(ValueError):
        get_connection_config({"provider": "x"})


def test_timeout_config_reads_environment(monkeypatch):
    assert get_timeout_config().http_timeout_seconds == 60.0
    monkeypatch.setenv("RESILIENT_CHAT_TIMEOUT_HTTP_SECONDS", "12.5")
    monkeypatch.setenv("RESILIENT_CHAT_TIMEOUT_STREAM_SECONDS", "-1")
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 12.5
    assert cfg.stream_timeout_seconds == 60.0
    assert cfg.for_purpose("chat").read == 12.5
