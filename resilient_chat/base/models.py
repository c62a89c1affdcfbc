"""
Chat-completion domain models public surface.

Re-exports the one-class-per-file implementations under
``resilient_chat.base.models_parts``.
"""

from .models_parts.role import Role
from .models_parts.function import (
    FunctionCall,
    FunctionCallDirective,
    FunctionCallSpecifying,
    FunctionDeclaration,
)
from .models_parts.message import Message
from .models_parts.tuning import TuningParameters
from .models_parts.chat_request import ChatRequest
from .models_parts.chat_response import ChatResponse, Choice, Usage
from .models_parts.chat_chunk import ChatChunk, ChunkChoice, Delta, FunctionCallDelta

__all__ = [
    "Role",
    "FunctionCall",
    "FunctionCallDirective",
    "FunctionCallSpecifying",
    "FunctionDeclaration",
    "Message",
    "TuningParameters",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "Usage",
    "ChatChunk",
    "ChunkChoice",
    "Delta",
    "FunctionCallDelta",
]
