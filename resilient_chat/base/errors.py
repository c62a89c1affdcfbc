"""Failure taxonomy and outcome classification public surface.

Re-exports the implementations under ``resilient_chat.base.errors_parts`` to
keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.unexpected_outcome_error import UnexpectedOutcomeError
from .errors_parts.classification import (
    classify_exception,
    classify_status,
    error_code_for_exception,
    error_code_for_status,
    is_success_status,
    outcome_for_exception,
    outcome_for_status,
)

__all__ = [
    "ErrorCode",
    "UnexpectedOutcomeError",
    "classify_exception",
    "classify_status",
    "error_code_for_exception",
    "error_code_for_status",
    "is_success_status",
    "outcome_for_exception",
    "outcome_for_status",
]
