"""Cooperative cancellation token.

A caller hands a ``CancellationToken`` to ``complete_chat`` or
``complete_chat_as_stream``; the connection polls it at each suspension point
(before sending, while recording the user turn, after the response arrives
and before every streamed chunk). Cancelling never interrupts a blocking
read; it takes effect at the next poll.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe cancellation flag with parent-to-child cascade.

    A UI or supervisor thread may call :meth:`cancel` while a worker thread
    drives the request. Tokens created with ``parent=`` (or via
    :meth:`child`) are cancelled together with their parent, never the
    other way round.
    """

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None
        self._lock = threading.Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent.link_child(self)

    @classmethod
    def cancelled_token(cls, reason: Optional[str] = None) -> "CancellationToken":
        """Return a token that is already cancelled."""
        token = cls()
        token.cancel(reason)
        return token

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        """Reason given to the first :meth:`cancel` call, if any."""
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation; later calls keep the first reason."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()
            children, self._children = self._children, []
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Cascade future cancellation to ``token``; returns ``token``.

        A child linked to an already-cancelled parent is cancelled at once.
        """
        with self._lock:
            if not self._event.is_set():
                self._children.append(token)
                return token
        token.cancel(self._reason)
        return token

    def child(self) -> "CancellationToken":
        return CancellationToken(parent=self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancelledError` when cancellation was requested."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
