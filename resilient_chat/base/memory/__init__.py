"""Chat memory implementations."""

from ..interfaces import ChatMemory, ClearPolicy
from .simple_chat_memory import SimpleChatMemory
from .finite_queue_chat_memory import FiniteQueueChatMemory

__all__ = ["ChatMemory", "ClearPolicy", "SimpleChatMemory", "FiniteQueueChatMemory"]
