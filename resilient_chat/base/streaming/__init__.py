"""Streaming primitives: SSE parsing, the chunk iterator, accumulation."""

from .sse import DONE_SENTINEL, is_done, parse_sse_data
from .chunk_stream import ChunkStream
from .accumulate import accumulate_chunks, iter_content

__all__ = [
    "DONE_SENTINEL",
    "is_done",
    "parse_sse_data",
    "ChunkStream",
    "accumulate_chunks",
    "iter_content",
]
