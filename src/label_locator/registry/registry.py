"""
Component Registry - Central registry for document engines.

Engines are registered by name so the CLI and configuration can pick one
without importing every browser stack up front.

Example:
    >>> from label_locator.registry import ComponentRegistry
    >>>
    >>> @ComponentRegistry.register_browser("static")
    ... class StaticBrowser(IBrowser):
    ...     pass
    >>>
    >>> browser_class = ComponentRegistry.get_browser("static")
"""

from typing import Callable, Dict, List, Type

from label_locator.interfaces.document import IBrowser


class ComponentRegistry:
    """
    Central registry for browser engines.

    Engines are registered either directly (decorator) or through a factory
    that imports the implementation on first use.
    """

    _browsers: Dict[str, Type[IBrowser]] = {}
    _browser_factories: Dict[str, Callable[[], Type[IBrowser]]] = {}

    @classmethod
    def register_browser(cls, name: str) -> Callable[[Type[IBrowser]], Type[IBrowser]]:
        """
        Decorator to register a browser implementation.

        Args:
            name: Unique name for the engine (e.g., 'selenium', 'static')

        Returns:
            Decorator function
        """
        def decorator(browser_class: Type[IBrowser]) -> Type[IBrowser]:
            if name in cls._browsers:
                raise ValueError(f"Browser '{name}' is already registered")
            cls._browsers[name] = browser_class
            return browser_class
        return decorator

    @classmethod
    def register_browser_factory(
        cls,
        name: str,
        factory: Callable[[], Type[IBrowser]],
    ) -> None:
        """
        Register a factory function for lazy-loading a browser.

        Avoids importing selenium/playwright until an engine is requested.
        """
        cls._browser_factories[name] = factory

    @classmethod
    def get_browser(cls, name: str) -> Type[IBrowser]:
        """
        Get a registered browser class by name.

        Raises:
            ValueError: If the browser is not registered
        """
        if name in cls._browsers:
            return cls._browsers[name]

        if name in cls._browser_factories:
            browser_class = cls._browser_factories[name]()
            cls._browsers[name] = browser_class
            return browser_class

        available = sorted(set(cls._browsers) | set(cls._browser_factories))
        raise ValueError(
            f"Unknown browser: '{name}'. Available browsers: {available}"
        )

    @classmethod
    def list_browsers(cls) -> List[str]:
        """List all registered browser names."""
        return sorted(set(cls._browsers.keys()) | set(cls._browser_factories.keys()))

    @classmethod
    def clear_all(cls) -> None:
        """Remove every registration (used by tests)."""
        cls._browsers.clear()
        cls._browser_factories.clear()
