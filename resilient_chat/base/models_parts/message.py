"""
Message value type.

A `Message` is one immutable chat turn. The conversation order matters: the
sequence sent to the API is every recorded message followed by the new user
message.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .function import FunctionCall
from .role import Role


@dataclass(frozen=True)
class Message:
    """A single chat turn.

    Attributes:
        role: Author of the turn.
        content: Text of the turn. ``None`` only for assistant messages that
            carry a ``function_call`` instead of text.
        name: Author name; required for ``Role.FUNCTION`` messages (the name
            of the function whose result is reported).
        function_call: Function invocation requested by the assistant.

    Raises:
        ValueError: when a function message has no name.
    """

    role: Role
    content: Optional[str]
    name: Optional[str] = None
    function_call: Optional[FunctionCall] = None

    def __post_init__(self) -> None:
        if not isinstance(self.role, Role):
            # Accept wire strings ("user") for convenience.
            object.__setattr__(self, "role", Role(self.role))
        if self.role is Role.FUNCTION and not self.name:
            raise ValueError("function messages require a name")

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str, name: Optional[str] = None) -> "Message":
        return cls(Role.USER, content, name=name)

    @classmethod
    def assistant(cls, content: Optional[str], function_call: Optional[FunctionCall] = None) -> "Message":
        return cls(Role.ASSISTANT, content, function_call=function_call)

    @classmethod
    def function(cls, name: str, content: str) -> "Message":
        return cls(Role.FUNCTION, content, name=name)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire mapping, omitting unset optional fields."""
        data: Dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.name is not None:
            data["name"] = self.name
        if self.function_call is not None:
            data["function_call"] = self.function_call.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Message":
        fc = data.get("function_call")
        return cls(
            role=Role(data["role"]),
            content=data.get("content"),
            name=data.get("name"),
            function_call=FunctionCall(fc["name"], fc.get("arguments", "")) if fc else None,
        )


__all__ = ["Message"]
