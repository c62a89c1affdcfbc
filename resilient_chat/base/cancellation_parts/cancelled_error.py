"""Cancellation error type.

Defines the public ``CancelledError`` signalling that a cooperative
cancellation request was observed.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinguishes cancellation from other runtime failures so the outcome
    classifier can report it as retryable instead of permanent.
    """


__all__ = ["CancelledError"]
