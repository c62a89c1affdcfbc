"""Bounded FIFO chat history.

Keeps at most ``max_messages`` appended turns; the oldest turn is evicted
when a new one would exceed the capacity. A system prompt seeded at
construction is exempt from eviction, always stays first and does not count
against the capacity.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from ..interfaces import ClearPolicy
from ..models import Message
from .simple_chat_memory import SimpleChatMemory


class FiniteQueueChatMemory(SimpleChatMemory):
    """Chat memory holding the ``max_messages`` most recent turns.

    Raises
    ------
    ValueError
        If ``max_messages`` is lower than 1.
    """

    def __init__(
        self,
        max_messages: int,
        system_prompt: Optional[str] = None,
        clear_policy: ClearPolicy = ClearPolicy.RESEED,
    ) -> None:
        if max_messages < 1:
            raise ValueError(f"max_messages must be >= 1, got {max_messages}")
        self._max_messages = max_messages
        super().__init__(system_prompt=system_prompt, clear_policy=clear_policy)

    def _new_turns(self) -> Deque[Message]:
        # deque(maxlen) drops from the left on overflow: FIFO eviction.
        return deque(maxlen=self._max_messages)

    @property
    def max_messages(self) -> int:
        return self._max_messages


__all__ = ["FiniteQueueChatMemory"]
