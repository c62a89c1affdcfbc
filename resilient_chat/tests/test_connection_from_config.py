"""Connections built from resolved configuration."""
from __future__ import annotations

import httpx
import pytest

from resilient_chat.base.http import HttpClientPool
from resilient_chat.base.interfaces import ClearPolicy
from resilient_chat.base.memory import FiniteQueueChatMemory
from resilient_chat.base.models import Message
from resilient_chat.config import ConnectionConfig, get_connection_config
from resilient_chat.openai import ChatCompletionConnection, Model


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY",
        "RESILIENT_CHAT_ENDPOINT",
        "RESILIENT_CHAT_MODEL",
        "RESILIENT_CHAT_MAX_MEMORY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def pool_for():
    pools = []

    def _factory(server):
        pool = HttpClientPool(transport=httpx.MockTransport(server))
        pools.append(pool)
        return pool

    yield _factory
    for pool in pools:
        pool.close()


def test_environment_settings_reach_the_wire(monkeypatch, ok_server, pool_for):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    monkeypatch.setenv("RESILIENT_CHAT_ENDPOINT", "https://proxy.internal/v1/chat/completions")
    monkeypatch.setenv("RESILIENT_CHAT_MODEL", "gpt-4")

    conn = ChatCompletionConnection.from_config(http_pool=pool_for(ok_server))
    conn.complete_chat("hello")

    request = ok_server.requests[-1]
    assert request.url.host == "proxy.internal"
    assert request.headers["Authorization"] == "Bearer sk-from-env"
    assert ok_server.last_json()["model"] == "gpt-4"
    assert conn.default_model == "gpt-4"


def test_memory_is_bounded_by_configured_capacity(ok_server, pool_for):
    config = get_connection_config({"api_key": "sk-unit", "max_memory_messages": 2})

    conn = ChatCompletionConnection.from_config(config, prompt="sys", http_pool=pool_for(ok_server))
    conn.complete_chat("one")
    conn.complete_chat("two")

    assert isinstance(conn.memory, FiniteQueueChatMemory)
    assert [m.content for m in conn.memory.snapshot()] == ["sys", "two", "Hi there!"]


def test_clear_policy_is_applied(ok_server, pool_for):
    config = ConnectionConfig(api_key="sk-unit")

    conn = ChatCompletionConnection.from_config(
        config, prompt="sys", http_pool=pool_for(ok_server), clear_policy=ClearPolicy.EMPTY
    )
    assert conn.memory.snapshot() == (Message.system("sys"),)
    conn.memory.clear()

    assert conn.memory.snapshot() == ()


def test_call_model_overrides_configured_default(ok_server, pool_for):
    config = ConnectionConfig(api_key="sk-unit", model="gpt-4")

    conn = ChatCompletionConnection.from_config(config, http_pool=pool_for(ok_server))
    conn.complete_chat("hello", model=Model.TURBO_16K)

    assert ok_server.last_json()["model"] == "gpt-3.5-turbo-16k"


def test_missing_api_key_is_rejected():
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        ChatCompletionConnection.from_config()
