"""resilient_chat.config.defaults
=============================

Central place for small, stable default values. They can be overridden via
environment variables or in-code overrides (see ``resilient_chat.config``).

This module intentionally imports nothing from the rest of the package to
avoid circular dependencies; only plain constants live here.
"""

from __future__ import annotations

# ---- Endpoint ----
CHAT_COMPLETION_ENDPOINT = "https://api.openai.com/v1/chat/completions"

# ---- Model ----
# Wire identifier of the default model (maps to ``Model.TURBO``).
DEFAULT_MODEL = "gpt-3.5-turbo"

# ---- Chat memory ----
# Capacity used when a bounded memory is requested without an explicit size.
DEFAULT_MAX_MEMORY_MESSAGES = 10

# ---- Pool purposes ----
HTTP_PURPOSE_CHAT = "chat"
HTTP_PURPOSE_STREAM = "stream"


__all__ = [
    "CHAT_COMPLETION_ENDPOINT",
    "DEFAULT_MODEL",
    "DEFAULT_MAX_MEMORY_MESSAGES",
    "HTTP_PURPOSE_CHAT",
    "HTTP_PURPOSE_STREAM",
]
