"""Streaming chat completion against simulated SSE servers."""
from __future__ import annotations

import httpx
import pytest

from resilient_chat.base.cancellation import CancellationToken
from resilient_chat.base.models import Message, Role
from resilient_chat.base.outcome import PermanentFailure, RetryableFailure, Success
from resilient_chat.base.streaming import ChunkStream, accumulate_chunks, iter_content

from conftest import chunk, sse_body


def _sse_server(make_server, body: bytes, status: int = 200):
    return make_server(
        lambda request: httpx.Response(
            status, content=body, headers={"Content-Type": "text/event-stream"}
        )
    )


def test_role_only_first_chunk_does_not_terminate_and_content_accumulates(make_connection, make_server):
    body = sse_body([chunk(role="assistant"), chunk("Hel"), chunk("lo"), chunk("!"), chunk(finish="stop")])
    conn = make_connection(_sse_server(make_server, body))

    outcome = conn.complete_chat_as_stream("hi", CancellationToken())

    assert isinstance(outcome, Success)
    with outcome.value as stream:
        chunks = list(stream)
    assert len(chunks) == 5
    assert chunks[0].content is None
    assert accumulate_chunks(chunks) == Message.assistant("Hello!")
    assert stream.finished is True
    assert stream.cancelled is False
    assert stream.error is None


def test_stream_request_forces_stream_flag(make_connection, make_server):
    server = _sse_server(make_server, sse_body([chunk("x")]))
    conn = make_connection(server)

    outcome = conn.complete_chat_as_stream("hi")
    list(outcome.value)

    assert server.last_json()["stream"] is True
    assert server.requests[0].headers["Authorization"] == "Bearer sk-unit"


def test_streamed_reply_is_not_appended_to_memory(make_connection, make_server):
    conn = make_connection(_sse_server(make_server, sse_body([chunk("a"), chunk("b")])), prompt="sys")

    outcome = conn.complete_chat_as_stream("hi")
    message = accumulate_chunks(outcome.value)

    assert [m.role for m in conn.memory.snapshot()] == [Role.SYSTEM, Role.USER]
    conn.memory.add_message(message)
    assert conn.memory.snapshot()[-1].content == "ab"


def test_stream_is_single_pass(make_connection, make_server):
    conn = make_connection(_sse_server(make_server, sse_body([chunk("a")])))
    stream = conn.complete_chat_as_stream("hi").value

    assert [c.content for c in stream] == ["a"]
    with pytest.raises(RuntimeError):
        iter(stream)


def test_done_sentinel_stops_before_trailing_data(make_connection, make_server):
    body = sse_body([chunk("a")]) + sse_body([chunk("never")], done=False)
    conn = make_connection(_sse_server(make_server, body))

    stream = conn.complete_chat_as_stream("hi").value

    assert list(iter_content(stream)) == ["a"]
    assert stream.finished is True


def test_remote_close_without_done_ends_sequence(make_connection, make_server):
    conn = make_connection(_sse_server(make_server, sse_body([chunk("a"), chunk("b")], done=False)))

    stream = conn.complete_chat_as_stream("hi").value

    assert list(iter_content(stream)) == ["a", "b"]
    assert stream.finished is False


def test_cancellation_mid_stream_ends_sequence(make_connection, make_server):
    token = CancellationToken()
    conn = make_connection(_sse_server(make_server, sse_body([chunk("a"), chunk("b"), chunk("c")])))
    stream = conn.complete_chat_as_stream("hi", token).value

    received = []
    for item in stream:
        received.append(item.content)
        token.cancel("stop")

    assert received == ["a"]
    assert stream.cancelled is True
    assert stream.finished is False


def test_malformed_chunks_are_skipped(make_connection, make_server):
    body = sse_body([chunk("a"), "{broken", ": keep-alive comment", chunk("b")])
    conn = make_connection(_sse_server(make_server, body))

    stream = conn.complete_chat_as_stream("hi").value

    assert list(iter_content(stream)) == ["a", "b"]
    assert stream.skipped == 2
    assert stream.emitted == 2


def test_comment_and_blank_lines_are_ignored(make_connection, make_server):
    body = b": ping\n\nevent: message\ndata: " + sse_body([chunk("x")])[len(b"data: "):]
    conn = make_connection(_sse_server(make_server, body))

    stream = conn.complete_chat_as_stream("hi").value

    assert list(iter_content(stream)) == ["x"]
    assert stream.skipped == 0


@pytest.mark.parametrize("status", [429, 503])
def test_stream_retryable_status(make_connection, make_server, status):
    conn = make_connection(_sse_server(make_server, b"", status=status))

    outcome = conn.complete_chat_as_stream("hi")

    assert isinstance(outcome, RetryableFailure)


def test_stream_permanent_status(make_connection, make_server):
    conn = make_connection(_sse_server(make_server, b"", status=401))

    outcome = conn.complete_chat_as_stream("hi")

    assert isinstance(outcome, PermanentFailure)


def test_stream_preflight_matches_single_shot(make_connection, make_server):
    server = _sse_server(make_server, sse_body([chunk("x")]))
    conn = make_connection(server)

    empty = conn.complete_chat_as_stream("")
    cancelled = conn.complete_chat_as_stream("hi", CancellationToken.cancelled_token())

    assert isinstance(empty, PermanentFailure)
    assert isinstance(cancelled, RetryableFailure)
    assert server.calls == 0
    assert len(conn.memory) == 0


def test_stream_transport_error_is_retryable(make_connection, make_server):
    def handler(request):
        raise httpx.ConnectError("refused")

    conn = make_connection(make_server(handler))

    assert isinstance(conn.complete_chat_as_stream("hi"), RetryableFailure)


class _FailingStream(httpx.SyncByteStream):
    def __iter__(self):
        yield b"data: " + sse_body([chunk("a")], done=False)[len(b"data: "):]
        raise httpx.ReadError("connection reset")


def test_transport_error_mid_stream_is_exposed(make_connection, make_server):
    server = make_server(lambda request: httpx.Response(200, stream=_FailingStream()))
    conn = make_connection(server)

    stream = conn.complete_chat_as_stream("hi").value
    contents = list(iter_content(stream))

    assert contents == ["a"]
    assert stream.error is not None and "ReadError" in stream.error


def test_closing_unconsumed_stream_is_safe(make_connection, make_server):
    conn = make_connection(_sse_server(make_server, sse_body([chunk("a")])))
    stream = conn.complete_chat_as_stream("hi").value

    assert isinstance(stream, ChunkStream)
    stream.close()
    stream.close()
    assert list(stream) == []
