"""Three-way outcome type returned by every fallible core operation.

Purpose
-------
Replace exception-driven control flow with a closed sum type so the retry
policy stays entirely with the caller:

- ``Success(value)`` – the operation produced a value.
- ``RetryableFailure(trace)`` – a transient condition (network, server
  overload, cancellation race); retrying with backoff may succeed.
- ``PermanentFailure(trace)`` – retrying cannot help (bad input, malformed or
  empty response, non-retryable status).

Only genuine programming errors escape as exceptions; ``expect_outcome``
raises :class:`UnexpectedOutcomeError` when handed something outside the three
variants.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

from .errors_parts.unexpected_outcome_error import UnexpectedOutcomeError

T = TypeVar("T")


class OutcomeKind(str, Enum):
    """Tag shared by the outcome variants."""

    SUCCESS = "success"
    RETRYABLE = "retryable"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.SUCCESS

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_retryable(self) -> bool:
        return False

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Success({self.value!r})"


@dataclass(frozen=True)
class RetryableFailure:
    """Failure that may resolve when the caller retries."""

    trace: str

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.RETRYABLE

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_retryable(self) -> bool:
        return True

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"RetryableFailure({self.trace})"


@dataclass(frozen=True)
class PermanentFailure:
    """Failure that a retry cannot fix."""

    trace: str

    @property
    def kind(self) -> OutcomeKind:
        return OutcomeKind.PERMANENT

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_retryable(self) -> bool:
        return False

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"PermanentFailure({self.trace})"


Outcome = Union[Success[T], RetryableFailure, PermanentFailure]


def succeed(value: T) -> Success[T]:
    return Success(value)


def retry_with_trace(trace: str) -> RetryableFailure:
    return RetryableFailure(trace)


def fail_with_trace(trace: str) -> PermanentFailure:
    return PermanentFailure(trace)


def expect_outcome(obj: Any, name: str = "outcome") -> "Outcome[Any]":
    """Return ``obj`` unchanged when it is one of the three outcome variants.

    Raises:
        UnexpectedOutcomeError: when ``obj`` is anything else. This signals a
            bug in the caller's exhaustiveness, not a runtime condition.
    """
    if isinstance(obj, (Success, RetryableFailure, PermanentFailure)):
        return obj
    raise UnexpectedOutcomeError(name=name, received=type(obj).__name__)


__all__ = [
    "Outcome",
    "OutcomeKind",
    "Success",
    "RetryableFailure",
    "PermanentFailure",
    "succeed",
    "retry_with_trace",
    "fail_with_trace",
    "expect_outcome",
]
