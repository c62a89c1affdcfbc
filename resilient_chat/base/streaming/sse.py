"""Server-sent event line parsing for streamed chat completions.

The API frames each chunk as a single ``data: {...}`` line followed by a blank
line and terminates the stream with ``data: [DONE]``. These helpers do not
perform I/O; they operate on lines as produced by
``httpx.Response.iter_lines()`` (``str`` or ``bytes``).
"""

from __future__ import annotations

from typing import Optional, Union

DONE_SENTINEL = "[DONE]"


def parse_sse_data(line: Union[str, bytes, None]) -> Optional[str]:
    """Return the ``data`` payload of an SSE line, or ``None``.

    ``None`` is returned for blank lines, comments (``:`` prefix) and other
    SSE fields (``event:``, ``id:``, ``retry:``), which carry no chunk.
    """
    if not line:
        return None
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    if line.startswith(":"):
        return None
    if not line.startswith("data:"):
        return None
    return line[5:].strip()


def is_done(payload: Optional[str]) -> bool:
    return payload == DONE_SENTINEL


__all__ = ["DONE_SENTINEL", "parse_sse_data", "is_done"]
