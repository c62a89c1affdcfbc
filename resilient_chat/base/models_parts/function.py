"""
Function-calling value types.

- ``FunctionDeclaration`` describes a function the model may call (sent with
  the request).
- ``FunctionCall`` is the call the assistant asks for (received in a message).
- ``FunctionCallSpecifying`` forces one named function; together with the
  plain strings ``"none"`` and ``"auto"`` it forms ``FunctionCallDirective``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union


@dataclass(frozen=True)
class FunctionDeclaration:
    """A callable function advertised to the model.

    Attributes:
        name: Function name (letters, digits, underscores, dashes).
        description: Optional human-readable description for the model.
        parameters: Optional JSON Schema object describing the arguments.
    """

    name: str
    description: Optional[str] = None
    parameters: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            data["description"] = self.description
        if self.parameters is not None:
            data["parameters"] = dict(self.parameters)
        return data


@dataclass(frozen=True)
class FunctionCall:
    """Function invocation requested by the assistant.

    ``arguments`` is the raw JSON text produced by the model; it is not
    guaranteed to be valid JSON.
    """

    name: str
    arguments: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "arguments": self.arguments}


@dataclass(frozen=True)
class FunctionCallSpecifying:
    """Directive forcing the model to call the function ``name``."""

    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


FunctionCallDirective = Union[str, FunctionCallSpecifying]


def directive_to_wire(directive: FunctionCallDirective) -> Union[str, Dict[str, Any]]:
    if isinstance(directive, FunctionCallSpecifying):
        return directive.to_dict()
    return directive


__all__ = [
    "FunctionDeclaration",
    "FunctionCall",
    "FunctionCallSpecifying",
    "FunctionCallDirective",
    "directive_to_wire",
]
