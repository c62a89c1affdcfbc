"""SSE line parsing and chunk accumulation helpers."""
from __future__ import annotations

import pytest

from resilient_chat.base.models import (
    ChatChunk,
    ChunkChoice,
    Delta,
    FunctionCall,
    FunctionCallDelta,
    Message,
    Role,
)
from resilient_chat.base.streaming import DONE_SENTINEL, accumulate_chunks, is_done, iter_content, parse_sse_data


@pytest.mark.parametrize(
    "line,expected",
    [
        ('data: {"a": 1}', '{"a": 1}'),
        ('data:{"a": 1}', '{"a": 1}'),
        (b"data: [DONE]", "[DONE]"),
        ("", None),
        (None, None),
        (": keep-alive", None),
        ("event: message", None),
        ("id: 7", None),
    ],
)
def test_parse_sse_data(line, expected):
    assert parse_sse_data(line) == expected


def test_done_sentinel():
    assert DONE_SENTINEL == "[DONE]"
    assert is_done("[DONE]")
    assert not is_done('{"choices": []}')
    assert not is_done(None)


def _chunk(content=None, role=None, index=0, function_call=None):
    return ChatChunk(choices=(ChunkChoice(index, Delta(role=role, content=content, function_call=function_call)),))


def test_accumulate_tolerates_absent_deltas():
    chunks = [_chunk(role=Role.ASSISTANT), _chunk("The "), _chunk(), _chunk("sky "), _chunk("is blue.")]

    assert accumulate_chunks(chunks) == Message.assistant("The sky is blue.")
    assert list(iter_content(chunks)) == ["The ", "sky ", "is blue."]


def test_accumulate_defaults_role_and_empty_content():
    assert accumulate_chunks([]) == Message.assistant("")


def test_accumulate_selects_choice_index():
    chunks = [_chunk("a", index=0), _chunk("x", index=1), _chunk("b", index=0), _chunk("y", index=1)]

    assert accumulate_chunks(chunks, choice_index=1).content == "xy"


def test_accumulate_function_call_deltas():
    chunks = [
        _chunk(role=Role.ASSISTANT, function_call=FunctionCallDelta(name="get_weather", arguments="")),
        _chunk(function_call=FunctionCallDelta(arguments='{"city": ')),
        _chunk(function_call=FunctionCallDelta(arguments='"Oslo"}')),
    ]

    message = accumulate_chunks(chunks)

    assert message.content is None
    assert message.function_call == FunctionCall("get_weather", '{"city": "Oslo"}')
