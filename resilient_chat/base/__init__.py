"""
Connection Base Package

Exports the vendor-neutral building blocks used by the connection layer:
- Outcome: three-way result type and the status/exception classifier
- Models: messages, tuning parameters, request/response/chunk shapes
- Memory: chat history contract and the unbounded/bounded implementations
- Transport: injectable HTTP client pool, timeouts, SSE chunk streaming
- Ambient: cancellation tokens, structured logging, caller-side retry
"""

from .cancellation import CancellationToken, CancelledError
from .outcome import (
    Outcome,
    OutcomeKind,
    PermanentFailure,
    RetryableFailure,
    Success,
    expect_outcome,
    fail_with_trace,
    retry_with_trace,
    succeed,
)
from .errors import (
    ErrorCode,
    UnexpectedOutcomeError,
    classify_exception,
    classify_status,
    outcome_for_exception,
    outcome_for_status,
)
from .models import (
    ChatChunk,
    ChatRequest,
    ChatResponse,
    Choice,
    FunctionCall,
    FunctionCallSpecifying,
    FunctionDeclaration,
    Message,
    Role,
    TuningParameters,
    Usage,
)
from .interfaces import ChatMemory, ClearPolicy
from .memory import FiniteQueueChatMemory, SimpleChatMemory
from .request_builder import build_request
from .serialization import (
    deserialize_chunk,
    deserialize_request,
    deserialize_response,
    serialize_request,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .http import HttpClientPool
from .streaming import ChunkStream, accumulate_chunks, iter_content
from .resilience import RetryConfig, retry_outcome

__all__ = [
    "CancellationToken",
    "CancelledError",
    "Outcome",
    "OutcomeKind",
    "Success",
    "RetryableFailure",
    "PermanentFailure",
    "succeed",
    "retry_with_trace",
    "fail_with_trace",
    "expect_outcome",
    "ErrorCode",
    "UnexpectedOutcomeError",
    "classify_status",
    "classify_exception",
    "outcome_for_status",
    "outcome_for_exception",
    "Role",
    "Message",
    "FunctionCall",
    "FunctionCallSpecifying",
    "FunctionDeclaration",
    "TuningParameters",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "Usage",
    "ChatChunk",
    "ChatMemory",
    "ClearPolicy",
    "SimpleChatMemory",
    "FiniteQueueChatMemory",
    "build_request",
    "serialize_request",
    "deserialize_request",
    "deserialize_response",
    "deserialize_chunk",
    "TimeoutConfig",
    "get_timeout_config",
    "HttpClientPool",
    "ChunkStream",
    "accumulate_chunks",
    "iter_content",
    "RetryConfig",
    "retry_outcome",
]
