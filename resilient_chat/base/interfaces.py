"""
Interfaces (Protocols) for the connection layer.

Re-exports Protocols split into single-class modules under
``resilient_chat.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts.chat_memory import ChatMemory, ClearPolicy

__all__ = ["ChatMemory", "ClearPolicy"]
