"""
Exceptions module - Custom exception hierarchy.

This module defines all custom exceptions used throughout Label Locator,
providing clear error types for different failure scenarios.
"""

from label_locator.exceptions.base import (
    LabelLocatorError,
    ConfigurationError,
)
from label_locator.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    PageError,
    NavigationError,
    ElementNotFoundError,
    TimeoutError as BrowserTimeoutError,
)
from label_locator.exceptions.resolution import (
    ResolutionError,
    LabelNotVisibleError,
    LabelNotFoundError,
    FormError,
    FieldValueMismatchError,
)

__all__ = [
    # Base exceptions
    "LabelLocatorError",
    "ConfigurationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "PageError",
    "NavigationError",
    "ElementNotFoundError",
    "BrowserTimeoutError",
    # Resolution exceptions
    "ResolutionError",
    "LabelNotVisibleError",
    "LabelNotFoundError",
    # Form exceptions
    "FormError",
    "FieldValueMismatchError",
]
