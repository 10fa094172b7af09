"""
Utilities module - Common utility functions.
"""

from label_locator.utils.logging import setup_logging
from label_locator.utils.retry import retry, call_with_retry, RetryConfig

__all__ = [
    "setup_logging",
    "retry",
    "call_with_retry",
    "RetryConfig",
]
