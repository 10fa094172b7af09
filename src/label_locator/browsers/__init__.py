"""
Browsers module - Document engine implementations.

The static engine is imported eagerly (lxml only). Selenium and Playwright
are registered lazily so neither stack is imported unless requested.
"""

from typing import TYPE_CHECKING

from label_locator.browsers.static_document import StaticBrowser, StaticDocument, StaticElement

if TYPE_CHECKING:
    from label_locator.config.settings import BrowserSettings
    from label_locator.interfaces.document import IBrowser

__all__ = [
    "StaticBrowser",
    "StaticDocument",
    "StaticElement",
    "launch_browser",
    "register_browsers",
]


def register_browsers() -> None:
    """Register browser implementations with the registry."""
    from label_locator.registry import ComponentRegistry

    if "static" not in ComponentRegistry.list_browsers():
        ComponentRegistry.register_browser("static")(StaticBrowser)

    def selenium_factory():
        from label_locator.browsers.selenium_browser import SeleniumBrowser
        return SeleniumBrowser

    def playwright_factory():
        from label_locator.browsers.playwright_browser import PlaywrightBrowser
        return PlaywrightBrowser

    ComponentRegistry.register_browser_factory("selenium", selenium_factory)
    ComponentRegistry.register_browser_factory("playwright", playwright_factory)


# Auto-register on import
register_browsers()


def launch_browser(settings: "BrowserSettings") -> "IBrowser":
    """
    Create and launch the browser named by settings.engine.

    Args:
        settings: Browser settings

    Returns:
        A launched browser; the caller closes it
    """
    from label_locator.interfaces.document import BrowserType
    from label_locator.registry import ComponentRegistry

    browser_class = ComponentRegistry.get_browser(settings.engine)
    browser = browser_class()
    browser.launch(
        headless=settings.headless,
        browser_type=BrowserType(settings.browser_type),
        window_width=settings.window_width,
        window_height=settings.window_height,
        start_maximized=settings.start_maximized,
        page_load_timeout_ms=settings.page_load_timeout_ms,
        driver_path=settings.driver_path,
    )
    return browser
