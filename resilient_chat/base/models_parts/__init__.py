"""Value types for the chat-completion domain; import from ``base.models``."""
