"""Chat-completion connection for the OpenAI chat API.

Overview
--------
``ChatCompletionConnection`` is the only component that touches both the chat
memory and the network. Every call returns an :data:`Outcome`; nothing is
retried here, the caller owns retry policy (see ``base.resilience``).

Call sequence (both modes):
  1. Reject empty content (permanent).
  2. Check the cancellation token (retryable when cancelled).
  3. Append the user turn to memory (skipped when retrying a turn that is
     already at the tail, see ``reuse_pending_turn``).
  4. Build and serialize the request from the memory snapshot.
  5. POST with bearer authorization and a JSON content type.
  6. Check the token again, then classify the HTTP status.

Single-shot mode decodes the body and appends every returned assistant
message to memory. Streaming mode returns a :class:`ChunkStream` and leaves
the assistant turn for the caller to append once it considers the stream
complete.

Thread safety: a connection may be shared, but calls that mutate the same
memory must be serialized by the owner.
"""
from __future__ import annotations

import dataclasses
import logging
import uuid
from typing import Dict, Optional, Union

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.errors import (
    ErrorCode,
    error_code_for_exception,
    error_code_for_status,
    is_success_status,
    outcome_for_exception,
    outcome_for_status,
)
from ..base.http import HttpClientPool
from ..base.interfaces import ChatMemory, ClearPolicy
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.memory import FiniteQueueChatMemory, SimpleChatMemory
from ..base.models import ChatResponse, Message, TuningParameters
from ..base.outcome import (
    Outcome,
    PermanentFailure,
    RetryableFailure,
    Success,
    expect_outcome,
    fail_with_trace,
    retry_with_trace,
    succeed,
)
from ..base.request_builder import build_request, resolve_model_name
from ..base.serialization import deserialize_response, serialize_request
from ..base.streaming import ChunkStream
from ..config import ConnectionConfig, get_connection_config
from ..config.defaults import (
    CHAT_COMPLETION_ENDPOINT,
    HTTP_PURPOSE_CHAT,
    HTTP_PURPOSE_STREAM,
)
from ..config.env import API_KEY_ENV
from .model import Model

Failure = Union[RetryableFailure, PermanentFailure]


class ChatCompletionConnection:
    """Resilient connection to the chat-completion endpoint.

    Args:
        api_key: API key sent as a bearer token. Must be non-empty.
        chat_memory: Conversation history; defaults to an unbounded
            :class:`SimpleChatMemory`.
        prompt: Optional system prompt. Seeded into the default memory, or
            appended as a system turn to an injected one.
        http_pool: Client pool; when omitted the connection creates and owns
            one and closes it in :meth:`close`.
        endpoint: Chat-completion URL.
        default_model: Model used when a call does not name one.
        verbose: Log request/response bodies and stream chunks at DEBUG.

    Raises:
        ValueError: if ``api_key`` is empty.
    """

    def __init__(
        self,
        api_key: str,
        chat_memory: Optional[ChatMemory] = None,
        prompt: Optional[str] = None,
        http_pool: Optional[HttpClientPool] = None,
        endpoint: str = CHAT_COMPLETION_ENDPOINT,
        verbose: bool = False,
        default_model: Union[Model, str] = Model.TURBO,
    ) -> None:
        if not api_key:
            raise ValueError("api_key must not be empty")
        self._api_key = api_key
        if chat_memory is None:
            chat_memory = SimpleChatMemory(system_prompt=prompt or None)
        elif prompt:
            chat_memory.add_message(Message.system(prompt))
        self._memory: ChatMemory = chat_memory
        self._owns_pool = http_pool is None
        self._pool = http_pool if http_pool is not None else HttpClientPool()
        self._endpoint = endpoint
        self._default_model = default_model
        self._verbose = verbose
        self._logger = get_logger("openai.connection")

    @classmethod
    def from_config(
        cls,
        config: Optional[ConnectionConfig] = None,
        *,
        prompt: Optional[str] = None,
        http_pool: Optional[HttpClientPool] = None,
        clear_policy: ClearPolicy = ClearPolicy.RESEED,
        verbose: bool = False,
    ) -> "ChatCompletionConnection":
        """Build a connection from resolved settings.

        ``config`` defaults to :func:`get_connection_config` (defaults, then
        environment). The memory is a :class:`FiniteQueueChatMemory` holding
        ``config.max_memory_messages`` turns, seeded with ``prompt``, and
        ``config.model`` becomes the default model.

        Raises:
            ValueError: if no API key is configured.
        """
        cfg = config if config is not None else get_connection_config()
        if not cfg.api_key:
            raise ValueError(f"no API key configured; set {API_KEY_ENV}")
        memory = FiniteQueueChatMemory(
            cfg.max_memory_messages,
            system_prompt=prompt or None,
            clear_policy=clear_policy,
        )
        return cls(
            cfg.api_key,
            chat_memory=memory,
            http_pool=http_pool,
            endpoint=cfg.endpoint,
            verbose=verbose,
            default_model=cfg.model,
        )

    # Public API -----------------------------------------------------------
    @property
    def memory(self) -> ChatMemory:
        return self._memory

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def default_model(self) -> Union[Model, str]:
        return self._default_model

    def close(self) -> None:
        """Close the client pool if this connection created it."""
        if self._owns_pool:
            self._pool.close()

    def __enter__(self) -> "ChatCompletionConnection":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def complete_chat(
        self,
        content: str,
        token: Optional[CancellationToken] = None,
        model: Optional[Union[Model, str]] = None,
        tuning: Optional[TuningParameters] = None,
        *,
        reuse_pending_turn: bool = False,
    ) -> Outcome[ChatResponse]:
        """Send ``content`` as a user turn and return the decoded response.

        On success every returned assistant message is appended to memory in
        response order. ``model`` defaults to :attr:`default_model`.

        With ``reuse_pending_turn`` the user turn is not recorded again when
        the newest message in memory already is this exact user turn, which
        is the state a retryable failure leaves behind. Pass it from a retry
        loop so every attempt sends the same history::

            retry_outcome(
                lambda: conn.complete_chat("hi", token, reuse_pending_turn=True),
                token=token,
            )
        """
        model = model if model is not None else self._default_model
        ctx = self._context(model)
        if tuning is not None and tuning.stream:
            tuning = dataclasses.replace(tuning, stream=None)
        prepared = self._prepare(content, token, model, tuning, ctx, reuse_pending_turn)
        if not isinstance(prepared, Success):
            return prepared
        body = prepared.value
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", emitted=False)

        try:
            client = self._pool.get(HTTP_PURPOSE_CHAT)
            response = client.post(self._endpoint, content=body, headers=self._headers())
        except Exception as exc:  # converted to an outcome, never re-raised
            return self._fail(
                outcome_for_exception(exc, "calling the API"),
                ctx,
                error_code_for_exception(exc),
            )

        if token is not None and token.cancelled:
            return self._fail(
                retry_with_trace(
                    "Retryable because operation was cancelled after the API responded."
                ),
                ctx,
                ErrorCode.CANCELLED,
            )
        if not is_success_status(response.status_code):
            return self._fail(
                outcome_for_status(response.status_code, response.reason_phrase),
                ctx,
                error_code_for_status(response.status_code),
                status=response.status_code,
            )

        if self._verbose:
            normalized_log_event(
                self._logger,
                "chat.response",
                ctx,
                phase="finalize",
                level=logging.DEBUG,
                body=response.text,
            )
        decoded = expect_outcome(deserialize_response(response.text), name="deserialize_response")
        if not isinstance(decoded, Success):
            return self._fail(decoded, ctx, ErrorCode.SERIALIZATION, status=response.status_code)
        result: ChatResponse = decoded.value
        if not result.choices:
            return self._fail(
                fail_with_trace("Failed because response body contained no choices."),
                ctx,
                ErrorCode.PROTOCOL,
                status=response.status_code,
            )

        # All assistant turns land together; no cancellation check in between.
        for choice in result.choices:
            self._memory.add_message(choice.message)

        ctx.response_id = result.id or None
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            tokens=dataclasses.asdict(result.usage) if result.usage else None,
            status=response.status_code,
            choices=len(result.choices),
        )
        return succeed(result)

    def complete_chat_as_stream(
        self,
        content: str,
        token: Optional[CancellationToken] = None,
        model: Optional[Union[Model, str]] = None,
        tuning: Optional[TuningParameters] = None,
        *,
        reuse_pending_turn: bool = False,
    ) -> Outcome[ChunkStream]:
        """Send ``content`` as a user turn and return a live chunk stream.

        The assistant reply is not appended to memory; accumulate the chunks
        (``accumulate_chunks``) and append the completed turn yourself.
        The returned stream must be consumed or closed to release the
        connection.
        ``model`` and ``reuse_pending_turn`` behave as in :meth:`complete_chat`.
        """
        model = model if model is not None else self._default_model
        ctx = self._context(model)
        tuning = dataclasses.replace(tuning or TuningParameters(), stream=True)
        prepared = self._prepare(content, token, model, tuning, ctx, reuse_pending_turn)
        if not isinstance(prepared, Success):
            return prepared
        body = prepared.value
        normalized_log_event(self._logger, "stream.start", ctx, phase="start", emitted=False)

        try:
            client = self._pool.get(HTTP_PURPOSE_STREAM)
            request = client.build_request(
                "POST", self._endpoint, content=body, headers=self._headers()
            )
            response = client.send(request, stream=True)
        except Exception as exc:  # converted to an outcome, never re-raised
            return self._fail(
                outcome_for_exception(exc, "calling the API"),
                ctx,
                error_code_for_exception(exc),
                event="stream.error",
            )

        if token is not None and token.cancelled:
            response.close()
            return self._fail(
                retry_with_trace(
                    "Retryable because operation was cancelled after the API responded."
                ),
                ctx,
                ErrorCode.CANCELLED,
                event="stream.error",
            )
        if not is_success_status(response.status_code):
            response.close()
            return self._fail(
                outcome_for_status(response.status_code, response.reason_phrase),
                ctx,
                error_code_for_status(response.status_code),
                event="stream.error",
                status=response.status_code,
            )

        return succeed(
            ChunkStream(response, token, ctx=ctx, logger=self._logger, verbose=self._verbose)
        )

    # Internals --------------------------------------------------------------
    def _context(self, model: Union[Model, str]) -> LogContext:
        return LogContext(
            model=resolve_model_name(model),
            endpoint=self._endpoint,
            request_id=uuid.uuid4().hex,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _prepare(
        self,
        content: str,
        token: Optional[CancellationToken],
        model: Union[Model, str],
        tuning: Optional[TuningParameters],
        ctx: LogContext,
        reuse_pending_turn: bool = False,
    ) -> Outcome[str]:
        """Pre-flight checks, user-turn append and request serialization."""
        if not content:
            return self._fail(
                fail_with_trace("Failed because content is null or empty."),
                ctx,
                ErrorCode.VALIDATION,
            )
        if token is not None and token.cancelled:
            return self._fail(
                retry_with_trace(
                    "Retryable because operation was cancelled before sending the request."
                ),
                ctx,
                ErrorCode.CANCELLED,
            )

        turn = Message.user(content)
        pending = self._memory.snapshot() if reuse_pending_turn else ()
        if not (pending and pending[-1] == turn):
            try:
                self._memory.add_message(turn, token)
            except CancelledError as exc:
                return self._fail(
                    outcome_for_exception(exc, "recording user message"),
                    ctx,
                    ErrorCode.CANCELLED,
                )
            except Exception as exc:  # memory implementations are pluggable
                return self._fail(
                    outcome_for_exception(exc, "recording user message"),
                    ctx,
                    error_code_for_exception(exc),
                )

        request = build_request(model, self._memory.snapshot(), tuning)
        serialized = expect_outcome(serialize_request(request), name="serialize_request")
        if not isinstance(serialized, Success):
            return self._fail(serialized, ctx, ErrorCode.VALIDATION)
        if self._verbose:
            normalized_log_event(
                self._logger,
                "chat.request",
                ctx,
                phase="start",
                level=logging.DEBUG,
                body=serialized.value,
            )
        return serialized

    def _fail(
        self,
        outcome: Failure,
        ctx: LogContext,
        error_code: Optional[ErrorCode],
        *,
        event: str = "chat.error",
        **fields,
    ) -> Failure:
        normalized_log_event(
            self._logger,
            event,
            ctx,
            phase="finalize",
            error_code=error_code.value if error_code else None,
            emitted=False,
            level=logging.WARNING if isinstance(outcome, RetryableFailure) else logging.ERROR,
            retryable=isinstance(outcome, RetryableFailure),
            trace=outcome.trace,
            **fields,
        )
        return outcome


__all__ = ["ChatCompletionConnection"]
