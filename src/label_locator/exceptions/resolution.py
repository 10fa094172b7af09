"""
Label resolution and form filling exceptions.
"""

from typing import List, Optional

from label_locator.exceptions.base import LabelLocatorError


class ResolutionError(LabelLocatorError):
    """Base exception for label resolution failures."""

    def __init__(self, message: str, label_text: str, details: dict | None = None):
        merged = {"label_text": label_text}
        merged.update(details or {})
        super().__init__(message, merged)
        self.label_text = label_text


class LabelNotVisibleError(ResolutionError):
    """
    No visible label contains the requested text.

    Raised by the presence gate when the bounded wait elapses. No lookup
    strategy has been attempted when this is raised.
    """

    def __init__(self, label_text: str, timeout_ms: int):
        super().__init__(
            f"Could not find a visible label containing text: '{label_text}'",
            label_text,
            {"timeout_ms": timeout_ms, "reason": "no visible label contains this text"},
        )
        self.timeout_ms = timeout_ms


class LabelNotFoundError(ResolutionError):
    """
    A label exists but no strategy could associate an input with it.

    Attributes:
        attempted: Names of the strategies that were tried, in order
    """

    def __init__(self, label_text: str, attempted: Optional[List[str]] = None):
        super().__init__(
            f"Could not locate input field for label: '{label_text}' using any strategy",
            label_text,
            {"reason": "no strategy matched", "attempted": attempted or []},
        )
        self.attempted = attempted or []


class FormError(LabelLocatorError):
    """Base exception for form filling errors."""
    pass


class FieldValueMismatchError(FormError):
    """
    The value read back from a field differs from the value typed into it.
    """

    def __init__(self, label: str, expected: str, actual: Optional[str]):
        super().__init__(
            f"Failed to enter text for field labeled '{label}'",
            {"expected": expected, "actual": actual},
        )
        self.label = label
        self.expected = expected
        self.actual = actual
