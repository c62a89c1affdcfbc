"""ChatMemory Protocol (single-class module).

Interface for the in-process conversation history owned by a connection.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable

from ..cancellation import CancellationToken
from ..models import Message


class ClearPolicy(str, Enum):
    """What ``clear()`` leaves behind.

    ``RESEED`` restores the system prompt seeded at construction (if any);
    ``EMPTY`` leaves the memory fully empty.
    """

    RESEED = "reseed"
    EMPTY = "empty"


@runtime_checkable
class ChatMemory(Protocol):
    """Ordered conversation history.

    Implementations:
    - keep insertion order,
    - mutate only through ``add_message`` and ``clear``,
    - return snapshots that never observe later mutation.

    Callers must serialize chat calls per memory instance; two in-flight
    completions on the same memory have no defined interleaving.
    """

    @property
    def clear_policy(self) -> ClearPolicy:  # pragma: no cover - interface
        ...

    @property
    def messages(self) -> Tuple[Message, ...]:  # pragma: no cover - interface
        """Current ordered snapshot."""
        ...

    def snapshot(self) -> Tuple[Message, ...]:  # pragma: no cover - interface
        ...

    def add_message(
        self,
        message: Message,
        token: Optional[CancellationToken] = None,
    ) -> None:  # pragma: no cover - interface
        """Append ``message`` at the tail.

        Raises
        ------
        CancelledError
            When ``token`` is already cancelled; memory is left unchanged.
        """
        ...

    def clear(self) -> None:  # pragma: no cover - interface
        ...

    def __len__(self) -> int:  # pragma: no cover - interface
        ...


__all__ = ["ChatMemory", "ClearPolicy"]
