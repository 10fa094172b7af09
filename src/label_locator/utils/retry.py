"""
Retry utilities with exponential backoff.
"""

import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.

    Attributes:
        max_attempts: Maximum number of attempts
        initial_delay_ms: Initial delay before first retry
        max_delay_ms: Maximum delay between retries
        backoff_multiplier: Multiplier for exponential backoff
        retry_on: Exception types to retry on
        on_retry: Callback function called on each retry
    """
    max_attempts: int = 3
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    backoff_multiplier: float = 2.0
    retry_on: Tuple[Type[Exception], ...] = (Exception,)
    on_retry: Optional[Callable[[int, Exception], None]] = None


def retry(
    max_attempts: int = 3,
    initial_delay_ms: int = 1000,
    max_delay_ms: int = 30000,
    backoff_multiplier: float = 2.0,
    retry_on: Tuple[Type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator for retrying functions with exponential backoff.

    Example:
        >>> @retry(max_attempts=3, retry_on=(LabelNotFoundError,))
        ... def find_field():
        ...     ...
    """
    config = RetryConfig(
        max_attempts=max_attempts,
        initial_delay_ms=initial_delay_ms,
        max_delay_ms=max_delay_ms,
        backoff_multiplier=backoff_multiplier,
        retry_on=retry_on,
    )

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            return call_with_retry(func, config, *args, **kwargs)
        return wrapper

    return decorator


def call_with_retry(
    func: Callable[..., T],
    config: RetryConfig,
    *args: Any,
    **kwargs: Any,
) -> T:
    """
    Execute a function with retry logic.

    Args:
        func: Function to execute
        config: Retry configuration
        *args: Function arguments
        **kwargs: Function keyword arguments

    Returns:
        Function result

    Raises:
        The last exception if all retries fail
    """
    last_exception: Optional[Exception] = None
    delay_ms: float = config.initial_delay_ms

    for attempt in range(max(config.max_attempts, 1)):
        try:
            return func(*args, **kwargs)
        except config.retry_on as e:
            last_exception = e

            if attempt == config.max_attempts - 1:
                break

            logger.warning(
                f"Attempt {attempt + 1}/{config.max_attempts} failed: {e}. "
                f"Retrying in {delay_ms:.0f}ms..."
            )

            if config.on_retry:
                config.on_retry(attempt + 1, e)

            time.sleep(delay_ms / 1000)

            delay_ms = min(
                delay_ms * config.backoff_multiplier,
                config.max_delay_ms,
            )

    raise last_exception  # type: ignore
