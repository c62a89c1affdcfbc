"""
ChatResponse: decoded single-shot response body.

A successful single-shot response carries at least one choice; the
connection treats zero choices as a permanent failure even when the HTTP call
succeeded.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .message import Message


@dataclass(frozen=True)
class Usage:
    """Token accounting reported by the API."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class Choice:
    """One completion alternative."""

    index: int
    message: Message
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class ChatResponse:
    """API response for a buffered (non-streaming) completion.

    Attributes:
        id: Response identifier.
        object: Object type tag (``"chat.completion"``).
        created: Unix timestamp.
        model: Model that produced the response.
        choices: Completion alternatives in API order.
        usage: Optional token usage.
    """

    id: str
    object: str
    created: int
    model: str
    choices: Tuple[Choice, ...]
    usage: Optional[Usage] = None

    @property
    def first_text(self) -> Optional[str]:
        """Content of the first choice, if any."""
        return self.choices[0].message.content if self.choices else None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "model": self.model,
            "choices": [
                {
                    "index": c.index,
                    "message": c.message.to_dict(),
                    "finish_reason": c.finish_reason,
                }
                for c in self.choices
            ],
        }
        if self.usage is not None:
            data["usage"] = {
                "prompt_tokens": self.usage.prompt_tokens,
                "completion_tokens": self.usage.completion_tokens,
                "total_tokens": self.usage.total_tokens,
            }
        return data


__all__ = ["Usage", "Choice", "ChatResponse"]
