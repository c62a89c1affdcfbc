"""Unbounded in-memory chat history.

Reference implementation of :class:`ChatMemory`: grows without limit and is
used when no capacity constraint is configured. Pure in-process state, no
I/O.
"""

from __future__ import annotations

from threading import Lock
from typing import List, MutableSequence, Optional, Tuple

from ..cancellation import CancellationToken
from ..interfaces import ClearPolicy
from ..models import Message


class SimpleChatMemory:
    """Unbounded chat memory.

    Parameters
    ----------
    system_prompt:
        Optional system prompt seeded as the first message.
    clear_policy:
        Whether ``clear()`` restores the seeded prompt (``RESEED``, default)
        or leaves the memory empty (``EMPTY``).

    Thread safety: appends and snapshots are guarded by a lock, so a snapshot
    taken concurrently with an append either contains the new message or not.
    Calls that mutate the conversation must still be serialized by the owner.
    """

    def __init__(
        self,
        system_prompt: Optional[str] = None,
        clear_policy: ClearPolicy = ClearPolicy.RESEED,
    ) -> None:
        self._lock = Lock()
        self._clear_policy = ClearPolicy(clear_policy)
        self._seed: Optional[Message] = Message.system(system_prompt) if system_prompt else None
        self._seed_present = self._seed is not None
        self._turns: MutableSequence[Message] = self._new_turns()

    def _new_turns(self) -> MutableSequence[Message]:
        turns: List[Message] = []
        return turns

    @property
    def clear_policy(self) -> ClearPolicy:
        return self._clear_policy

    @property
    def system_prompt(self) -> Optional[str]:
        """Seeded system prompt, if one was configured."""
        return self._seed.content if self._seed is not None else None

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self.snapshot()

    def snapshot(self) -> Tuple[Message, ...]:
        """Return an immutable copy of the current ordered messages."""
        with self._lock:
            head: Tuple[Message, ...] = (self._seed,) if self._seed_present and self._seed else ()
            return head + tuple(self._turns)

    @property
    def turn_count(self) -> int:
        """Number of appended turns retained (seeded prompt excluded)."""
        with self._lock:
            return len(self._turns)

    def add_message(self, message: Message, token: Optional[CancellationToken] = None) -> None:
        """Append ``message`` at the tail.

        Raises
        ------
        CancelledError
            If ``token`` is already cancelled; nothing is appended.
        """
        if token is not None:
            token.raise_if_cancelled()
        with self._lock:
            self._turns.append(message)

    def clear(self) -> None:
        """Drop every appended turn and apply the clear policy to the seed."""
        with self._lock:
            self._turns = self._new_turns()
            self._seed_present = self._seed is not None and self._clear_policy is ClearPolicy.RESEED

    def __len__(self) -> int:
        with self._lock:
            return len(self._turns) + (1 if self._seed_present else 0)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"{type(self).__name__}(messages={len(self)}, clear_policy={self._clear_policy.value})"


__all__ = ["SimpleChatMemory"]
