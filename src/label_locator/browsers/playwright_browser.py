"""
Playwright Browser - Implementation of IBrowser/IDocument using Playwright.

Uses the synchronous Playwright API. XPath selectors are passed with the
``xpath=`` engine prefix.
"""

from typing import Any, List, Optional
import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from label_locator.interfaces.document import (
    BrowserType,
    IBrowser,
    IDocument,
    IElement,
    normalize_space,
)
from label_locator.exceptions.browser import (
    BrowserLaunchError,
    NavigationError,
    TimeoutError as BrowserTimeoutError,
)

logger = logging.getLogger(__name__)


def _xpath(selector: str) -> str:
    return selector if selector.startswith("xpath=") else f"xpath={selector}"


class PlaywrightElement(IElement):
    """
    Playwright implementation of IElement.

    Wraps a Playwright ElementHandle for interaction and inspection.
    """

    def __init__(self, element: Any):
        self._element = element

    @property
    def raw(self) -> Any:
        """The wrapped ElementHandle."""
        return self._element

    @property
    def tag_name(self) -> str:
        return self._element.evaluate("el => el.tagName.toLowerCase()")

    def get_attribute(self, name: str) -> Optional[str]:
        try:
            return self._element.get_attribute(name)
        except PlaywrightError as e:
            logger.debug(f"get_attribute({name}) failed: {e}")
            return None

    def normalized_text(self) -> str:
        return normalize_space(self._element.text_content())

    def is_displayed(self) -> bool:
        return self._element.is_visible()

    @property
    def value(self) -> Optional[str]:
        return self._element.input_value()

    def clear(self) -> None:
        self._element.fill("")

    def type_text(self, text: str) -> None:
        self._element.type(text)

    def scroll_into_view(self) -> None:
        self._element.scroll_into_view_if_needed()


class PlaywrightPage(IDocument):
    """
    Playwright implementation of IDocument.

    Wraps a Playwright Page for navigation and querying.
    """

    def __init__(self, page: Any):
        self._page = page

    @property
    def url(self) -> str:
        return self._page.url

    def goto(self, url: str, **options: Any) -> None:
        try:
            self._page.goto(url, **options)
        except PlaywrightError as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}", url=url)

    def find_all(self, selector: str) -> List[IElement]:
        elements = self._page.query_selector_all(_xpath(selector))
        return [PlaywrightElement(el) for el in elements]

    def wait_until_visible(
        self,
        selector: str,
        timeout_ms: int,
        poll_interval_ms: int = 500,
    ) -> None:
        # Playwright polls on its own schedule; poll_interval_ms is not used.
        # A timeout of 0 means "wait forever" to Playwright, so 1ms is the floor.
        try:
            self._page.wait_for_selector(_xpath(selector), state="visible", timeout=max(timeout_ms, 1))
        except PlaywrightTimeoutError:
            raise BrowserTimeoutError(
                f"No visible element for {selector} after {timeout_ms}ms",
                timeout_ms=timeout_ms,
                operation="wait_until_visible",
            )

    def close(self) -> None:
        self._page.close()


class PlaywrightBrowser(IBrowser):
    """
    Playwright implementation of IBrowser.

    Example:
        >>> browser = PlaywrightBrowser()
        >>> browser.launch(headless=True)
        >>> page = browser.new_page()
        >>> page.goto("https://example.com")
    """

    def __init__(self):
        self._playwright: Any = None
        self._browser: Any = None
        self._viewport = {"width": 1280, "height": 720}
        self._timeout_ms: Optional[int] = None

    @property
    def is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROMIUM,
        **options: Any,
    ) -> None:
        """
        Launch the browser.

        ``chrome`` and ``edge`` map to Chromium with the matching channel.
        """
        channel = None
        engine_name = browser_type.value
        if browser_type == BrowserType.CHROME:
            engine_name, channel = "chromium", "chrome"
        elif browser_type == BrowserType.EDGE:
            engine_name, channel = "chromium", "msedge"

        try:
            self._playwright = sync_playwright().start()
            launcher = getattr(self._playwright, engine_name)
            launch_args = {"headless": headless}
            if channel:
                launch_args["channel"] = channel
            self._browser = launcher.launch(**launch_args)
        except PlaywrightError as e:
            self.close()
            raise BrowserLaunchError(f"Failed to launch {browser_type.value}: {e}")

        self._viewport = {
            "width": options.get("window_width", 1280),
            "height": options.get("window_height", 720),
        }
        self._timeout_ms = options.get("page_load_timeout_ms")
        logger.info(f"Playwright {browser_type.value} launched (headless={headless})")

    def new_page(self, **options: Any) -> IDocument:
        if not self._browser:
            raise BrowserLaunchError("Browser not launched")
        page = self._browser.new_page(viewport=options.get("viewport", self._viewport))
        if self._timeout_ms:
            page.set_default_navigation_timeout(self._timeout_ms)
        return PlaywrightPage(page)

    def close(self) -> None:
        if self._browser:
            self._browser.close()
            self._browser = None
        if self._playwright:
            self._playwright.stop()
            self._playwright = None
