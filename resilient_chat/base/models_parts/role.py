"""
Chat role enumeration.

Values equal the wire strings of the chat-completion API, so ``Role`` members
serialize directly and ``Role("assistant")`` parses a response field.
"""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Author of a chat turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"


__all__ = ["Role"]
