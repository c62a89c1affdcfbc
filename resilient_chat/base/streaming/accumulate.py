"""Accumulation of streamed chunks into a completed assistant message.

The connection never records a streamed reply in memory; only the caller
knows when a partial stream is a complete turn. ``accumulate_chunks`` joins
the deltas so the caller can append the result itself::

    outcome = connection.complete_chat_as_stream("hi", token)
    if outcome.is_success:
        with outcome.value as stream:
            message = accumulate_chunks(stream)
        connection.memory.add_message(message)
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..models import ChatChunk, FunctionCall, Message, Role


def accumulate_chunks(chunks: Iterable[ChatChunk], choice_index: int = 0) -> Message:
    """Join the deltas of choice ``choice_index`` into one :class:`Message`.

    Absent deltas (role-only or empty chunks) are tolerated and contribute
    nothing. The role defaults to assistant when no chunk announces one.
    """
    role: Optional[Role] = None
    text: List[str] = []
    fn_name: Optional[str] = None
    fn_args: List[str] = []
    saw_content = False
    for chunk in chunks:
        for choice in chunk.choices:
            if choice.index != choice_index:
                continue
            delta = choice.delta
            if delta.role is not None and role is None:
                role = delta.role
            if delta.content is not None:
                saw_content = True
                text.append(delta.content)
            if delta.function_call is not None:
                if delta.function_call.name:
                    fn_name = delta.function_call.name
                if delta.function_call.arguments:
                    fn_args.append(delta.function_call.arguments)
    function_call = FunctionCall(fn_name, "".join(fn_args)) if fn_name else None
    content = "".join(text) if saw_content or function_call is None else None
    return Message(role or Role.ASSISTANT, content, function_call=function_call)


def iter_content(chunks: Iterable[ChatChunk]) -> Iterable[str]:
    """Yield the non-empty content deltas of the first choice, in order."""
    for chunk in chunks:
        delta = chunk.content
        if delta:
            yield delta


__all__ = ["accumulate_chunks", "iter_content"]
