"""
ChatRequest: the request payload snapshot.

Holds the model identifier, the full message sequence *by value* (a tuple
copied from a memory snapshot) and the tuning parameters. Mutating the chat
memory after the request is built never changes the request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .message import Message
from .tuning import TuningParameters


@dataclass(frozen=True)
class ChatRequest:
    """Normalized chat-completion request.

    Attributes:
        model: Wire model identifier (e.g. ``"gpt-3.5-turbo"``).
        messages: Ordered messages to send.
        tuning: Optional parameters; unset fields are not serialized.

    Methods:
        to_dict: Return the JSON-serializable wire mapping.
    """

    model: str
    messages: Tuple[Message, ...]
    tuning: TuningParameters = field(default_factory=TuningParameters)

    def __post_init__(self) -> None:
        if not isinstance(self.messages, tuple):
            object.__setattr__(self, "messages", tuple(self.messages))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
        }
        data.update(self.tuning.to_wire())
        return data


__all__ = ["ChatRequest"]
