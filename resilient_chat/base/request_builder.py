"""Request assembly from memory snapshot and call-time parameters."""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Union

from .models import ChatRequest, Message, TuningParameters


def resolve_model_name(model: Union[str, Enum]) -> str:
    """Return the wire identifier for ``model`` (enum member or raw string)."""
    if isinstance(model, Enum):
        return str(model.value)
    return str(model)


def build_request(
    model: Union[str, Enum],
    snapshot: Iterable[Message],
    tuning: Optional[TuningParameters] = None,
) -> ChatRequest:
    """Build a :class:`ChatRequest` holding a value copy of ``snapshot``.

    Unset tuning fields stay unset and are omitted on the wire.
    """
    return ChatRequest(
        model=resolve_model_name(model),
        messages=tuple(snapshot),
        tuning=tuning or TuningParameters(),
    )


__all__ = ["build_request", "resolve_model_name"]
