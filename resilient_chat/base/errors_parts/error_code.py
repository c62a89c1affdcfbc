"""
Normalized failure codes (taxonomy).

Defines the `ErrorCode` enumeration attached to every failure log event.
Values are lowercase snake_case and are a stable contract for log consumers.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    VALIDATION = "validation"
    CANCELLED = "cancelled"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    SERIALIZATION = "serialization"
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"
    HTTP_STATUS = "http_status"
    INTERNAL = "internal"


__all__ = ["ErrorCode"]
