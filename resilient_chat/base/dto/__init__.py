"""Wire DTO validation package."""

from .chat import (
    ChatChunkDTO,
    ChatRequestDTO,
    ChatResponseDTO,
    MessageDTO,
)

__all__ = [
    "ChatChunkDTO",
    "ChatRequestDTO",
    "ChatResponseDTO",
    "MessageDTO",
]
