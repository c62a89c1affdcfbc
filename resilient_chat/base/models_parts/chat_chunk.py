"""
ChatChunk: one incremental unit of a streamed response.

Structurally a response body whose choices carry a ``Delta`` rather than a
full message. Every delta field may be absent; in particular the first chunk
of a stream usually carries only the role.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .role import Role


@dataclass(frozen=True)
class FunctionCallDelta:
    """Fragment of a streamed function call."""

    name: Optional[str] = None
    arguments: Optional[str] = None


@dataclass(frozen=True)
class Delta:
    role: Optional[Role] = None
    content: Optional[str] = None
    function_call: Optional[FunctionCallDelta] = None


@dataclass(frozen=True)
class ChunkChoice:
    index: int
    delta: Delta
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class ChatChunk:
    """Streamed partial response."""

    choices: Tuple[ChunkChoice, ...]
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None

    @property
    def content(self) -> Optional[str]:
        """Content delta of the first choice (``None`` when absent)."""
        return self.choices[0].delta.content if self.choices else None

    @property
    def finish_reason(self) -> Optional[str]:
        return self.choices[0].finish_reason if self.choices else None


__all__ = ["FunctionCallDelta", "Delta", "ChunkChoice", "ChatChunk"]
