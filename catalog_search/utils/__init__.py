"""
Utility modules for Catalog Search
"""
from .retry import retry_with_backoff, is_retryable_error, estimate_retry_time

__all__ = [
    "retry_with_backoff",
    "is_retryable_error",
    "estimate_retry_time",
]
