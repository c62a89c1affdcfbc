"""Caller-side resilience helpers."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry_outcome

__all__ = ["DEFAULT_RETRY_CONFIG", "RetryConfig", "retry_outcome"]
