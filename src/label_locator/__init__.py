"""
Label Locator - find form inputs by the label text a person reads.

Brittle locators (ids, classes, absolute paths) break when markup is
refactored. This package resolves a visible label such as "First Name" to
its input by trying a fixed order of structural heuristics, anchored to the
label text.

Example:
    >>> from label_locator import LabelResolver
    >>> from label_locator.browsers import StaticDocument
    >>> doc = StaticDocument.from_html('<label for="fn">First Name</label><input id="fn">')
    >>> LabelResolver().resolve(doc, "First Name").get_attribute("id")
    'fn'
"""

__version__ = "0.1.0"

# Public API exports
from label_locator.engine.label_resolver import LabelResolver, LabelStrategy, ResolvedLabel
from label_locator.config.settings import Settings

__all__ = [
    "LabelResolver",
    "LabelStrategy",
    "ResolvedLabel",
    "Settings",
    "__version__",
]
