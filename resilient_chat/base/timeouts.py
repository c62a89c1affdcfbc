"""Timeout configuration for the HTTP transport.

Centralizes the timeout values used when the client pool creates
``httpx.Client`` instances, so no numeric literals are scattered across the
connection code.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use (and again whenever the variables change). Supported
    environment variables (all optional, positive floats):
        RESILIENT_CHAT_TIMEOUT_CONNECT_SECONDS
        RESILIENT_CHAT_TIMEOUT_HTTP_SECONDS
        RESILIENT_CHAT_TIMEOUT_STREAM_SECONDS

Timeouts only bound how long the transport waits; they never trigger an
internal retry. An elapsed timeout surfaces as ``httpx.TimeoutException`` and
is classified as retryable.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        http_timeout_seconds: Read/write/pool timeout for buffered calls.
        stream_timeout_seconds: Idle timeout between streamed chunks.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 60.0
    stream_timeout_seconds: float = 60.0

    def for_purpose(self, purpose: str) -> httpx.Timeout:
        """Return the ``httpx.Timeout`` for a pool purpose (``chat``/``stream``)."""
        read = self.stream_timeout_seconds if purpose == "stream" else self.http_timeout_seconds
        return httpx.Timeout(read, connect=self.connect_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None

_ENV_NAMES = (
    "RESILIENT_CHAT_TIMEOUT_CONNECT_SECONDS",
    "RESILIENT_CHAT_TIMEOUT_HTTP_SECONDS",
    "RESILIENT_CHAT_TIMEOUT_STREAM_SECONDS",
)


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``; fall back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.http_timeout_seconds),
        stream_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.stream_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
