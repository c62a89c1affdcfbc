"""Caller-side retry for outcome-returning calls.

The connection never retries on its own; it only classifies. Applications
that want backoff wrap their own call::

    outcome = retry_outcome(
        lambda: connection.complete_chat("hi", token, reuse_pending_turn=True),
        token=token,
    )

Only ``RetryableFailure`` results are retried. A failed attempt leaves the
user turn recorded in memory; ``reuse_pending_turn`` makes the next attempt
send that turn again instead of recording a duplicate.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, TypeVar

from ..cancellation import CancellationToken
from ..outcome import Outcome, RetryableFailure, expect_outcome

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        outcome: Outcome,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    delay_base: float = 2.0  # exponential base (base ** attempt)
    attempt_logger: AttemptLogger | None = None

    def delays(self) -> Iterable[float]:
        for attempt in range(self.max_attempts - 1):
            yield self.delay_base**attempt


DEFAULT_RETRY_CONFIG = RetryConfig()


def retry_outcome(
    call: Callable[[], Outcome[T]],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    token: Optional[CancellationToken] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> Outcome[T]:
    """Invoke ``call`` until it stops returning ``RetryableFailure``.

    - At most ``config.max_attempts`` invocations.
    - Exponential backoff ``delay_base ** attempt`` between attempts.
    - Stops before sleeping when ``token`` is cancelled and returns the last
      retryable outcome.
    """
    delays = list(config.delays()) + [None]  # final attempt has no delay
    outcome: Outcome[T] = RetryableFailure("Retryable because no attempt was made.")
    for attempt, delay in enumerate(delays):
        outcome = expect_outcome(call(), name="retry_outcome")
        retrying = isinstance(outcome, RetryableFailure) and delay is not None
        if retrying and token is not None and token.cancelled:
            retrying = False
        if config.attempt_logger:
            config.attempt_logger(
                attempt=attempt,
                max_attempts=config.max_attempts,
                delay=delay if retrying else None,
                outcome=outcome,
            )
        if not retrying:
            return outcome
        sleep(delay)
    return outcome  # pragma: no cover - the final attempt always returns above


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "retry_outcome",
]
