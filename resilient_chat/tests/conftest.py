"""Pytest configuration for the connection test suite.

Provides simulated chat-completion servers built on ``httpx.MockTransport``
and a factory for connections wired to them through an injected
``HttpClientPool``. No test touches the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

import httpx
import pytest

from resilient_chat.base.http import HttpClientPool
from resilient_chat.openai import ChatCompletionConnection


Handler = Callable[[httpx.Request], httpx.Response]


class RecordingServer:
    """Wrap a handler and remember every request it received."""

    def __init__(self, handler: Handler) -> None:
        self._handler = handler
        self.requests: List[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


def chat_body(*contents: str, usage: bool = True) -> Dict[str, Any]:
    """Build a buffered response body with one assistant choice per content."""
    body: Dict[str, Any] = {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1690000000,
        "model": "gpt-3.5-turbo-0613",
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": text},
                "finish_reason": "stop",
            }
            for i, text in enumerate(contents)
        ],
    }
    if usage:
        body["usage"] = {"prompt_tokens": 9, "completion_tokens": 12, "total_tokens": 21}
    return body


def chunk(content: Optional[str] = None, role: Optional[str] = None, finish: Optional[str] = None) -> Dict[str, Any]:
    """Build one streamed chunk payload for the first choice."""
    delta: Dict[str, Any] = {}
    if role is not None:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion.chunk",
        "created": 1690000000,
        "model": "gpt-3.5-turbo-0613",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish}],
    }


def sse_body(events: Iterable[Union[Dict[str, Any], str]], done: bool = True) -> bytes:
    """Frame ``events`` as server-sent ``data:`` lines (raw strings pass through)."""
    lines = []
    for event in events:
        payload = event if isinstance(event, str) else json.dumps(event)
        lines.append(f"data: {payload}\n\n")
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


@pytest.fixture()
def make_server() -> Callable[[Handler], RecordingServer]:
    return RecordingServer


@pytest.fixture()
def make_connection() -> Iterator[Callable[..., ChatCompletionConnection]]:
    """Yield a factory building connections bound to a simulated server.

    Every pool created here is closed at teardown.
    """

    pools: List[HttpClientPool] = []

    def _factory(server: Handler, **kwargs: Any) -> ChatCompletionConnection:
        pool = HttpClientPool(transport=httpx.MockTransport(server))
        pools.append(pool)
        kwargs.setdefault("api_key", "sk-unit")
        return ChatCompletionConnection(http_pool=pool, **kwargs)

    yield _factory
    for pool in pools:
        pool.close()


@pytest.fixture()
def ok_server(make_server) -> RecordingServer:
    """Server answering every call with a single assistant choice."""
    return make_server(lambda request: httpx.Response(200, json=chat_body("Hi there!")))
