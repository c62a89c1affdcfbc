"""
Outcome classification for chat-completion attempts.

Maps HTTP status codes and exceptions raised around the network call onto the
three-way :class:`OutcomeKind` and a normalized :class:`ErrorCode`. The rules
form a fixed triage table:

==========================================  ===========
Condition                                   Kind
==========================================  ===========
2xx status                                  SUCCESS
429 Too Many Requests                       RETRYABLE
500-599                                     RETRYABLE
any other status                            PERMANENT
``CancelledError`` (cooperative cancel)     RETRYABLE
``httpx.RequestError`` (DNS, socket, I/O)   RETRYABLE
any other exception                         PERMANENT
==========================================  ===========

Classification is pure: the same input always yields the same kind.
"""
from __future__ import annotations

from typing import Dict

import httpx

from ..cancellation import CancelledError
from ..outcome import (
    OutcomeKind,
    PermanentFailure,
    RetryableFailure,
    fail_with_trace,
    retry_with_trace,
)
from .error_code import ErrorCode


_RETRYABLE_STATUS: Dict[int, ErrorCode] = {
    429: ErrorCode.RATE_LIMIT,
}


def is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def classify_status(status_code: int) -> OutcomeKind:
    """Classify an HTTP status code."""
    if is_success_status(status_code):
        return OutcomeKind.SUCCESS
    if status_code in _RETRYABLE_STATUS or 500 <= status_code <= 599:
        return OutcomeKind.RETRYABLE
    return OutcomeKind.PERMANENT


def error_code_for_status(status_code: int) -> ErrorCode | None:
    """Return the normalized code for a non-success status (``None`` for 2xx)."""
    if is_success_status(status_code):
        return None
    if status_code in _RETRYABLE_STATUS:
        return _RETRYABLE_STATUS[status_code]
    if 500 <= status_code <= 599:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.HTTP_STATUS


def classify_exception(exc: BaseException) -> OutcomeKind:
    """Classify an exception raised while recording or sending a request.

    Only cooperative cancellation and transport failures are retryable; an
    unrelated exception stays permanent even if the token was cancelled
    around the same time.
    """
    if isinstance(exc, (CancelledError, httpx.RequestError)):
        return OutcomeKind.RETRYABLE
    return OutcomeKind.PERMANENT


def error_code_for_exception(exc: BaseException) -> ErrorCode:
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, httpx.RequestError):
        return ErrorCode.TRANSPORT
    return ErrorCode.INTERNAL


def _status_text(status_code: int, reason: str | None = None) -> str:
    return f"({status_code}){reason or httpx.codes.get_reason_phrase(status_code)}"


def outcome_for_status(
    status_code: int, reason: str | None = None
) -> RetryableFailure | PermanentFailure:
    """Build the failure outcome for a non-success HTTP status.

    Raises:
        ValueError: if called with a success status; success needs a decoded
            body and is built by the connection itself.
    """
    kind = classify_status(status_code)
    if kind is OutcomeKind.RETRYABLE:
        return retry_with_trace(
            f"Retryable because the API returned status code:{_status_text(status_code, reason)}."
        )
    if kind is OutcomeKind.PERMANENT:
        return fail_with_trace(
            f"Failed because the API returned status code:{_status_text(status_code, reason)}."
        )
    raise ValueError(f"status {status_code} is not a failure status")


def outcome_for_exception(
    exc: BaseException,
    stage: str,
) -> RetryableFailure | PermanentFailure:
    """Build the failure outcome for ``exc`` raised during ``stage``.

    ``stage`` is a short phrase such as ``"recording user message"`` or
    ``"calling the API"`` woven into the trace.
    """
    if isinstance(exc, CancelledError):
        return retry_with_trace(
            f"Retryable because operation was cancelled during {stage} -> {exc}."
        )
    if isinstance(exc, httpx.RequestError):
        return retry_with_trace(
            f"Retryable because {type(exc).__name__} was thrown during {stage} -> {exc}."
        )
    return fail_with_trace(
        f"Failed because an unhandled exception was thrown during {stage} -> "
        f"{type(exc).__name__}: {exc}."
    )


__all__ = [
    "is_success_status",
    "classify_status",
    "classify_exception",
    "error_code_for_status",
    "error_code_for_exception",
    "outcome_for_status",
    "outcome_for_exception",
]
