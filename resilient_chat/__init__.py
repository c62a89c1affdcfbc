"""resilient_chat: a resilient chat-completion connection layer.

Typical use::

    from resilient_chat import ChatCompletionConnection, CancellationToken

    with ChatCompletionConnection(api_key, prompt="You are terse.") as conn:
        outcome = conn.complete_chat("Hello", CancellationToken())
        if outcome.is_success:
            print(outcome.value.first_text)
        elif outcome.is_retryable:
            ...  # back off and try again
        else:
            print(outcome.trace)
"""

from .base import (
    CancellationToken,
    CancelledError,
    ChatChunk,
    ChatMemory,
    ChatResponse,
    ChunkStream,
    ClearPolicy,
    FiniteQueueChatMemory,
    HttpClientPool,
    Message,
    Outcome,
    OutcomeKind,
    PermanentFailure,
    RetryableFailure,
    RetryConfig,
    Role,
    SimpleChatMemory,
    Success,
    TuningParameters,
    UnexpectedOutcomeError,
    accumulate_chunks,
    retry_outcome,
)
from .config import ConnectionConfig, get_connection_config
from .openai import ChatCompletionConnection, Model, to_model, to_text

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChatCompletionConnection",
    "Model",
    "to_text",
    "to_model",
    "CancellationToken",
    "CancelledError",
    "Outcome",
    "OutcomeKind",
    "Success",
    "RetryableFailure",
    "PermanentFailure",
    "UnexpectedOutcomeError",
    "Role",
    "Message",
    "TuningParameters",
    "ChatResponse",
    "ChatChunk",
    "ChunkStream",
    "accumulate_chunks",
    "ChatMemory",
    "ClearPolicy",
    "SimpleChatMemory",
    "FiniteQueueChatMemory",
    "HttpClientPool",
    "RetryConfig",
    "retry_outcome",
    "ConnectionConfig",
    "get_connection_config",
]
