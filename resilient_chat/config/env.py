"""resilient_chat.config.env
=========================

Environment variable names and helpers for the API key source.

The connection only requires a non-empty key string; where it comes from is
the embedding application's business. These helpers cover the common case of
reading it from the process environment.

Failure Modes
-------------
Helpers never raise on unset variables; they return ``None`` and the caller
decides how to proceed.
"""

from __future__ import annotations

import os
from typing import Optional, Tuple

API_KEY_ENV = "OPENAI_API_KEY"
ENDPOINT_ENV = "RESILIENT_CHAT_ENDPOINT"
MODEL_ENV = "RESILIENT_CHAT_MODEL"
MAX_MEMORY_ENV = "RESILIENT_CHAT_MAX_MEMORY"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_' (case-insensitive, surrounding spaces ignored).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def resolve_api_key(env_var: str = API_KEY_ENV) -> Tuple[Optional[str], Optional[str]]:
    """Resolve the API key from the environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when unset, blank or a
        placeholder.
    """
    val = (os.environ.get(env_var) or "").strip()
    if not val or is_placeholder(val):
        return None, None
    return val, env_var


def getenv_nonempty(name: str) -> Optional[str]:
    """Return the stripped value of ``name`` or ``None`` when unset/blank."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return None
    return val.strip()


__all__ = [
    "API_KEY_ENV",
    "ENDPOINT_ENV",
    "MODEL_ENV",
    "MAX_MEMORY_ENV",
    "is_placeholder",
    "resolve_api_key",
    "getenv_nonempty",
]
