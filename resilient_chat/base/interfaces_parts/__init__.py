"""Protocol modules; import from ``resilient_chat.base.interfaces``."""
