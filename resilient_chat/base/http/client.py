"""Injectable HTTP client pool.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so that
    connection setup is paid once and kept alive across chat calls. The pool
    is an explicit object owned by the application's composition root and
    passed into connections; there is no module-level singleton.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Timeout strategy:
    - Each client's timeout derives from :func:`get_timeout_config` for its
      purpose at creation time.

Lifecycle & cleanup:
    - Clients are cached per ``purpose`` string ("chat", "stream").
    - The owner closes the pool via :meth:`HttpClientPool.close` or by using
      it as a context manager.

Testing:
    - A custom ``transport`` (e.g. ``httpx.MockTransport``) may be supplied;
      every client created by the pool uses it.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

import httpx

from ..timeouts import TimeoutConfig, get_timeout_config


class HttpClientPool:
    """Pool of ``httpx.Client`` instances keyed by purpose.

    Parameters:
        transport: Optional transport shared by all pooled clients.
        timeouts: Optional timeout configuration; defaults to
            :func:`get_timeout_config`.
        limits: Optional connection limits forwarded to ``httpx.Client``.
    """

    def __init__(
        self,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        timeouts: Optional[TimeoutConfig] = None,
        limits: Optional[httpx.Limits] = None,
    ) -> None:
        self._transport = transport
        self._timeouts = timeouts
        self._limits = limits
        self._clients: Dict[str, httpx.Client] = {}
        self._lock = threading.RLock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, purpose: str) -> httpx.Client:
        """Return the pooled client for ``purpose``, creating it on first use.

        Raises:
            RuntimeError: if the pool has been closed.
        """
        client = self._clients.get(purpose)
        if client is not None:
            return client
        with self._lock:
            if self._closed:
                raise RuntimeError("HttpClientPool is closed")
            client = self._clients.get(purpose)
            if client is not None:
                return client
            cfg = self._timeouts or get_timeout_config()
            kwargs = {"timeout": cfg.for_purpose(purpose)}
            if self._transport is not None:
                kwargs["transport"] = self._transport
            if self._limits is not None:
                kwargs["limits"] = self._limits
            client = httpx.Client(**kwargs)
            self._clients[purpose] = client
            return client

    def close(self) -> None:
        """Close and drop every pooled client; idempotent."""
        with self._lock:
            for client in self._clients.values():
                client.close()
            self._clients.clear()
            self._closed = True

    def __enter__(self) -> "HttpClientPool":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["HttpClientPool"]
