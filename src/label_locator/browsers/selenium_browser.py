"""
Selenium Browser - Implementation of IBrowser/IDocument using Selenium WebDriver.

Waits use WebDriverWait with expected_conditions; NoSuchElementException and
TimeoutException are translated into the library's own exceptions so the
resolver never sees Selenium types.
"""

from typing import Any, List, Optional
import logging

from selenium import webdriver
from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from label_locator.interfaces.document import (
    BrowserType,
    IBrowser,
    IDocument,
    IElement,
    normalize_space,
)
from label_locator.exceptions.browser import (
    BrowserLaunchError,
    ElementNotFoundError,
    NavigationError,
    TimeoutError as BrowserTimeoutError,
)

logger = logging.getLogger(__name__)


class SeleniumElement(IElement):
    """Selenium implementation of IElement, wrapping a WebElement."""

    def __init__(self, element: Any, driver: Any):
        self._element = element
        self._driver = driver

    @property
    def raw(self) -> Any:
        """The wrapped WebElement."""
        return self._element

    @property
    def tag_name(self) -> str:
        return self._element.tag_name.lower()

    def get_attribute(self, name: str) -> Optional[str]:
        try:
            return self._element.get_attribute(name)
        except (StaleElementReferenceException, WebDriverException) as e:
            logger.debug(f"get_attribute({name}) failed: {e}")
            return None

    def normalized_text(self) -> str:
        return normalize_space(self._element.text)

    def is_displayed(self) -> bool:
        try:
            return self._element.is_displayed()
        except StaleElementReferenceException:
            return False

    @property
    def value(self) -> Optional[str]:
        return self.get_attribute("value")

    def clear(self) -> None:
        self._element.clear()

    def type_text(self, text: str) -> None:
        self._element.send_keys(text)

    def scroll_into_view(self) -> None:
        self._driver.execute_script("arguments[0].scrollIntoView(true);", self._element)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SeleniumElement) and other._element == self._element

    def __hash__(self) -> int:
        return hash(self._element.id)


class SeleniumPage(IDocument):
    """Selenium implementation of IDocument over a WebDriver session."""

    def __init__(self, driver: Any):
        self._driver = driver

    @property
    def driver(self) -> Any:
        return self._driver

    @property
    def url(self) -> str:
        return self._driver.current_url

    def goto(self, url: str, **options: Any) -> None:
        try:
            self._driver.get(url)
        except WebDriverException as e:
            raise NavigationError(f"Failed to navigate to {url}: {e.msg}", url=url)

    def find_all(self, selector: str) -> List[IElement]:
        elements = self._driver.find_elements(By.XPATH, selector)
        return [SeleniumElement(el, self._driver) for el in elements]

    def find_one(self, selector: str) -> IElement:
        try:
            element = self._driver.find_element(By.XPATH, selector)
        except NoSuchElementException:
            raise ElementNotFoundError(f"No element matches {selector}", selector=selector)
        return SeleniumElement(element, self._driver)

    def wait_until_visible(
        self,
        selector: str,
        timeout_ms: int,
        poll_interval_ms: int = 500,
    ) -> None:
        wait = WebDriverWait(
            self._driver,
            timeout_ms / 1000,
            poll_frequency=poll_interval_ms / 1000,
            ignored_exceptions=(StaleElementReferenceException,),
        )
        try:
            # Any visible match satisfies the wait, not only the first one
            wait.until(EC.visibility_of_any_elements_located((By.XPATH, selector)))
        except TimeoutException:
            raise BrowserTimeoutError(
                f"No visible element for {selector} after {timeout_ms}ms",
                timeout_ms=timeout_ms,
                operation="wait_until_visible",
            )

    def close(self) -> None:
        self._driver.close()


class SeleniumBrowser(IBrowser):
    """
    Selenium implementation of IBrowser.

    Example:
        >>> browser = SeleniumBrowser()
        >>> browser.launch(headless=True)
        >>> page = browser.new_page()
        >>> page.goto("https://example.com")
    """

    def __init__(self):
        self._driver: Any = None

    @property
    def is_connected(self) -> bool:
        return self._driver is not None

    def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROME,
        **options: Any,
    ) -> None:
        """
        Launch the browser.

        Args:
            headless: Run without a window
            browser_type: chrome, chromium, firefox or edge
            **options: window_width, window_height, start_maximized,
                page_load_timeout_ms, driver_path
        """
        width = options.get("window_width", 1280)
        height = options.get("window_height", 720)

        try:
            if browser_type in (BrowserType.CHROME, BrowserType.CHROMIUM):
                chrome_options = webdriver.ChromeOptions()
                if headless:
                    chrome_options.add_argument("--headless=new")
                if options.get("start_maximized"):
                    chrome_options.add_argument("--start-maximized")
                chrome_options.add_argument(f"--window-size={width},{height}")
                service = webdriver.ChromeService(executable_path=options["driver_path"]) if options.get("driver_path") else None
                self._driver = webdriver.Chrome(options=chrome_options, service=service)
            elif browser_type == BrowserType.FIREFOX:
                firefox_options = webdriver.FirefoxOptions()
                if headless:
                    firefox_options.add_argument("-headless")
                service = webdriver.FirefoxService(executable_path=options["driver_path"]) if options.get("driver_path") else None
                self._driver = webdriver.Firefox(options=firefox_options, service=service)
                self._driver.set_window_size(width, height)
            elif browser_type == BrowserType.EDGE:
                edge_options = webdriver.EdgeOptions()
                if headless:
                    edge_options.add_argument("--headless=new")
                edge_options.add_argument(f"--window-size={width},{height}")
                service = webdriver.EdgeService(executable_path=options["driver_path"]) if options.get("driver_path") else None
                self._driver = webdriver.Edge(options=edge_options, service=service)
            else:
                raise BrowserLaunchError(f"Selenium does not support browser type: {browser_type.value}")
        except WebDriverException as e:
            raise BrowserLaunchError(f"Failed to launch {browser_type.value}: {e.msg}")

        if "page_load_timeout_ms" in options:
            self._driver.set_page_load_timeout(options["page_load_timeout_ms"] / 1000)

        logger.info(f"Selenium {browser_type.value} launched (headless={headless})")

    def new_page(self, **options: Any) -> IDocument:
        """Selenium drives a single window per session; returns a page over it."""
        if not self._driver:
            raise BrowserLaunchError("Browser not launched")
        return SeleniumPage(self._driver)

    def close(self) -> None:
        if self._driver:
            self._driver.quit()
            self._driver = None
