"""Closed enumeration of chat-completion models and their wire identifiers."""
from __future__ import annotations

from enum import Enum
from typing import Dict


class Model(str, Enum):
    TURBO = "gpt-3.5-turbo"
    TURBO_0613 = "gpt-3.5-turbo-0613"
    TURBO_16K = "gpt-3.5-turbo-16k"
    TURBO_16K_0613 = "gpt-3.5-turbo-16k-0613"
    FOUR = "gpt-4"
    FOUR_0613 = "gpt-4-0613"
    FOUR_32K = "gpt-4-32k"
    FOUR_32K_0613 = "gpt-4-32k-0613"


_BY_TEXT: Dict[str, Model] = {m.value: m for m in Model}


def to_text(model: Model) -> str:
    """Return the wire identifier sent in the request ``model`` field."""
    return Model(model).value


def to_model(text: str) -> Model:
    """Inverse of :func:`to_text`.

    Raises:
        ValueError: if ``text`` names no known model.
    """
    try:
        return _BY_TEXT[text]
    except KeyError:
        raise ValueError(f"unknown model identifier: {text!r}") from None


__all__ = ["Model", "to_text", "to_model"]
