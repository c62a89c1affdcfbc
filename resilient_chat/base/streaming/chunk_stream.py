"""Single-pass chunk iterator over a live streaming response.

``ChunkStream`` wraps an open ``httpx.Response`` (sent with ``stream=True``)
and yields :class:`ChatChunk` objects lazily. It is forward-only and not
restartable: the bytes come from the network once. It is also not safe to
share between concurrent consumers.

The sequence ends when:
  * the ``[DONE]`` sentinel arrives (``finished`` becomes True),
  * the remote closes the stream,
  * the cancellation token is observed cancelled before a chunk is yielded
    (``cancelled`` becomes True), or
  * a transport error interrupts the read (``error`` holds its description).

In every case the underlying response is closed. Chunks whose payload cannot
be decoded are skipped and counted in ``skipped``. A chunk with an absent
content delta (typically the first, carrying only the role) is yielded like
any other; it is not a terminator.
"""
from __future__ import annotations

import logging
from typing import Iterator, Optional

import httpx

from ..cancellation import CancellationToken
from ..errors import ErrorCode
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import ChatChunk
from ..outcome import Success
from ..serialization import deserialize_chunk
from .sse import is_done, parse_sse_data


class ChunkStream:
    """Lazy, finite, forward-only sequence of streamed chunks."""

    def __init__(
        self,
        response: httpx.Response,
        token: CancellationToken | None = None,
        *,
        ctx: LogContext | None = None,
        logger: logging.Logger | None = None,
        verbose: bool = False,
    ) -> None:
        self._response = response
        self._token = token
        self._ctx = ctx
        self._logger = logger or get_logger("resilient_chat.streaming")
        self._verbose = verbose
        self._started = False
        self._closed = False
        self._finished = False
        self._cancelled = False
        self._error: Optional[str] = None
        self._emitted = 0
        self._skipped = 0

    # API -----------------------------------------------------------------
    @property
    def finished(self) -> bool:  # noqa: D401 - short property
        """Whether the ``[DONE]`` sentinel was received."""
        return self._finished

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short property
        """Whether the sequence ended because the token was cancelled."""
        return self._cancelled

    @property
    def error(self) -> Optional[str]:  # noqa: D401 - short property
        """Description of the transport error that ended the stream, if any."""
        return self._error

    @property
    def emitted(self) -> int:
        return self._emitted

    @property
    def skipped(self) -> int:
        return self._skipped

    @property
    def status_code(self) -> int:
        return self._response.status_code

    def close(self) -> None:
        """Release the underlying response; safe to call repeatedly."""
        if not self._closed:
            self._closed = True
            self._response.close()

    def __enter__(self) -> "ChunkStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[ChatChunk]:
        if self._started:
            raise RuntimeError("ChunkStream is single-pass and was already consumed")
        self._started = True
        return self._iterate()

    # Internals -------------------------------------------------------------
    def _observe_cancel(self) -> bool:
        if self._token is not None and self._token.cancelled:
            self._cancelled = True
            return True
        return False

    def _iterate(self) -> Iterator[ChatChunk]:
        try:
            if self._closed or self._observe_cancel():
                return
            for line in self._response.iter_lines():
                if self._observe_cancel():
                    break
                payload = parse_sse_data(line)
                if payload is None:
                    continue
                if is_done(payload):
                    self._finished = True
                    break
                outcome = deserialize_chunk(payload)
                if isinstance(outcome, Success):
                    self._emitted += 1
                    if self._verbose:
                        normalized_log_event(
                            self._logger,
                            "stream.chunk",
                            self._ctx,
                            phase="stream",
                            emitted=True,
                            level=logging.DEBUG,
                            payload=payload,
                        )
                    yield outcome.value
                else:
                    self._skipped += 1
                    normalized_log_event(
                        self._logger,
                        "stream.chunk_skipped",
                        self._ctx,
                        phase="stream",
                        error_code=ErrorCode.SERIALIZATION.value,
                        emitted=False,
                        level=logging.WARNING,
                        trace=outcome.trace,
                    )
        except (httpx.HTTPError, httpx.StreamError) as exc:
            self._error = f"{type(exc).__name__}: {exc}"
            normalized_log_event(
                self._logger,
                "stream.error",
                self._ctx,
                phase="stream",
                error_code=ErrorCode.TRANSPORT.value,
                emitted=self._emitted > 0,
                level=logging.WARNING,
                error=self._error,
            )
        finally:
            self.close()
            normalized_log_event(
                self._logger,
                "stream.end",
                self._ctx,
                phase="finalize",
                emitted=self._emitted > 0,
                chunks=self._emitted,
                skipped=self._skipped,
                finished=self._finished,
                cancelled=self._cancelled,
            )

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"ChunkStream(emitted={self._emitted}, finished={self._finished}, "
            f"cancelled={self._cancelled}, error={self._error!r})"
        )


__all__ = ["ChunkStream"]
