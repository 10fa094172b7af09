"""
Browser and document related exceptions.
"""

from label_locator.exceptions.base import LabelLocatorError


class BrowserError(LabelLocatorError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.

    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries or drivers
    - Invalid browser options
    - Unsupported browser type for the chosen engine
    """
    pass


class PageError(BrowserError):
    """Base exception for page/document errors."""
    pass


class NavigationError(PageError):
    """
    Error during page navigation.

    Raised when navigation fails (invalid URL, network error, unreadable file).
    """

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url


class ElementNotFoundError(PageError):
    """
    Element not found in the document.

    The structural "no match" signal of a single-element lookup. It is
    distinct from a timeout: nothing was waited for.
    """

    def __init__(self, message: str, selector: str):
        super().__init__(message, {"selector": selector})
        self.selector = selector


class TimeoutError(PageError):
    """
    Operation timed out.

    Raised when a bounded wait on the document elapses.
    """

    def __init__(self, message: str, timeout_ms: int, operation: str | None = None):
        super().__init__(message, {"timeout_ms": timeout_ms, "operation": operation})
        self.timeout_ms = timeout_ms
        self.operation = operation
