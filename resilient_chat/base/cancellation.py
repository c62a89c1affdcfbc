"""Cooperative cancellation primitives (public API facade).

Purpose
-------
Expose the cancellation constructs threaded through every suspending call of
the connection layer via the canonical ``resilient_chat.base.cancellation``
import path, while the concrete implementations live under
``cancellation_parts``.

Notes
-----
- ``CancellationToken`` is checked at each suspension point: pre-flight,
  memory append, after the HTTP call returns, and per streamed chunk.
- ``CancelledError`` is raised by operations that observe a cancellation
  request (e.g. ``ChatMemory.add_message``); the connection converts it into a
  retryable outcome.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
