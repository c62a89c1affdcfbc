"""Configuration layer for chat-completion connections.

Sources are merged in a predictable order:
    1. Built-in defaults (``config.defaults``)
    2. Environment variables
       (``OPENAI_API_KEY``, ``RESILIENT_CHAT_ENDPOINT``,
       ``RESILIENT_CHAT_MODEL``, ``RESILIENT_CHAT_MAX_MEMORY``)
    3. In-code overrides passed to :func:`get_connection_config`

Public API
----------
* ConnectionConfig
* get_connection_config(overrides: dict | None = None) -> ConnectionConfig
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .defaults import (
    CHAT_COMPLETION_ENDPOINT,
    DEFAULT_MAX_MEMORY_MESSAGES,
    DEFAULT_MODEL,
)
from .env import (
    ENDPOINT_ENV,
    MAX_MEMORY_ENV,
    MODEL_ENV,
    getenv_nonempty,
    resolve_api_key,
)


@dataclass(frozen=True)
class ConnectionConfig:
    """Resolved settings for building a connection.

    Attributes:
        api_key: API key, ``None`` when not configured.
        endpoint: Chat-completion endpoint URL.
        model: Wire identifier of the default model.
        max_memory_messages: Capacity for bounded chat memory.
    """

    api_key: Optional[str] = None
    endpoint: str = CHAT_COMPLETION_ENDPOINT
    model: str = DEFAULT_MODEL
    max_memory_messages: int = DEFAULT_MAX_MEMORY_MESSAGES


def _env_int(name: str, default: int) -> int:
    raw = getenv_nonempty(name)
    if raw is None:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_connection_config(overrides: Optional[Dict[str, Any]] = None) -> ConnectionConfig:
    """Return the merged configuration.

    Unknown override keys raise ``ValueError``; ``None`` override values are
    ignored.
    """
    api_key, _ = resolve_api_key()
    cfg = ConnectionConfig(
        api_key=api_key,
        endpoint=getenv_nonempty(ENDPOINT_ENV) or CHAT_COMPLETION_ENDPOINT,
        model=getenv_nonempty(MODEL_ENV) or DEFAULT_MODEL,
        max_memory_messages=_env_int(MAX_MEMORY_ENV, DEFAULT_MAX_MEMORY_MESSAGES),
    )
    if overrides:
        known = {f.name for f in fields(ConnectionConfig)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"unknown configuration keys: {sorted(unknown)}")
        cfg = replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
    return cfg


__all__ = ["ConnectionConfig", "get_connection_config"]
