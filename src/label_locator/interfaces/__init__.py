"""
Interfaces module - Abstract base classes for pluggable components.
"""

from label_locator.interfaces.document import (
    BrowserType,
    ElementHandle,
    IBrowser,
    IDocument,
    IElement,
    normalize_space,
)

__all__ = [
    "BrowserType",
    "ElementHandle",
    "IBrowser",
    "IDocument",
    "IElement",
    "normalize_space",
]
