"""Utility Functions"""

from knowhow.utils.resilience import (
    create_backoff_retry,
)

__all__ = [
    "create_backoff_retry",
]
