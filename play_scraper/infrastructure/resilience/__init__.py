"""
Resilience patterns for the fetch layer.

Provides:
- Error classification
- Retry policies with backoff
"""
from .error_classifier import classify_error, classify_status, parse_retry_after
from .retry_policy import RetryExecutor, RetryPolicy

__all__ = [
    "classify_error",
    "classify_status",
    "parse_retry_after",
    "RetryExecutor",
    "RetryPolicy",
]
