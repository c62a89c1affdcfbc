"""
Fatal error raised when an outcome match is not exhaustive.

This is the one fault that is allowed to cross the connection boundary: it
indicates a programming bug (a value that is neither success, retryable nor
permanent), never a runtime network or payload condition.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class UnexpectedOutcomeError(Exception):
    """Raised by :func:`expect_outcome` for values outside the outcome union.

    Attributes:
        name: Label of the value being matched (e.g. ``"serialization"``).
        received: Type name of the offending value.
    """

    name: str
    received: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.name}: expected an outcome variant, received {self.received}"


__all__ = ["UnexpectedOutcomeError"]
