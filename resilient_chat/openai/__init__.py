"""OpenAI chat-completion connection and model lookup."""

from .connection import ChatCompletionConnection
from .model import Model, to_model, to_text

__all__ = ["ChatCompletionConnection", "Model", "to_model", "to_text"]
