"""
Registry module - Plugin registration for document engines.
"""

from label_locator.registry.registry import ComponentRegistry

__all__ = [
    "ComponentRegistry",
]
