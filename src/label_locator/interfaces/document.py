"""
Document Interface - Abstract base classes for queryable, rendered documents.

This module defines the contract that document engines (Selenium, Playwright,
static HTML) must follow so the label resolver can query them. Selectors are
XPath 1.0 expressions throughout.

Example:
    >>> from label_locator.browsers.selenium_browser import SeleniumBrowser
    >>> browser = SeleniumBrowser()
    >>> browser.launch(headless=True)
    >>> page = browser.new_page()
    >>> page.goto("https://example.com/form")
    >>> page.find_all("//input")
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from label_locator.exceptions.browser import ElementNotFoundError


class BrowserType(Enum):
    """Supported browser types."""
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    CHROMIUM = "chromium"
    WEBKIT = "webkit"


def normalize_space(text: Optional[str]) -> str:
    """Collapse whitespace runs and trim, like XPath ``normalize-space()``."""
    if not text:
        return ""
    return " ".join(text.split())


@dataclass
class ElementHandle:
    """
    Represents a DOM element with its properties.

    This is a lightweight, serializable snapshot of a DOM element
    that can be printed or logged without holding browser references.

    Attributes:
        selector: The XPath selector used to find this element
        tag_name: The HTML tag name (e.g., 'input', 'textarea')
        attributes: Dictionary of the element's interesting attributes
        text_content: The normalized text content of the element
        is_visible: Whether the element is visible on the page
    """
    selector: str
    tag_name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text_content: str = ""
    is_visible: bool = True

    @property
    def id(self) -> Optional[str]:
        """Get the element's id attribute."""
        return self.attributes.get("id")

    def describe(self) -> str:
        """Short human-readable description, e.g. ``input#fn[name=first]``."""
        parts = [self.tag_name]
        if self.id:
            parts.append(f"#{self.id}")
        for name in ("name", "type", "placeholder", "aria-label"):
            value = self.attributes.get(name)
            if value:
                parts.append(f"[{name}={value}]")
        return "".join(parts)


# Attributes captured by to_handle() implementations
HANDLE_ATTRIBUTES = ("id", "name", "type", "for", "placeholder", "aria-label", "class")


class IElement(ABC):
    """
    Abstract interface for a live element reference.

    An IElement is scoped to the document that produced it. Using it after
    the document navigated away is undefined.
    """

    @property
    @abstractmethod
    def tag_name(self) -> str:
        """Lower-case tag name."""
        ...

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute value from this element.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or None if not present. Never raises.
        """
        ...

    @abstractmethod
    def normalized_text(self) -> str:
        """
        Get the whitespace-collapsed, trimmed text content.

        Returns:
            The normalized text
        """
        ...

    @abstractmethod
    def is_displayed(self) -> bool:
        """Check if this element is visible."""
        ...

    @property
    @abstractmethod
    def value(self) -> Optional[str]:
        """Current value of a form control."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Clear the element's value."""
        ...

    @abstractmethod
    def type_text(self, text: str) -> None:
        """
        Type text into the element.

        Args:
            text: Text to type
        """
        ...

    @abstractmethod
    def scroll_into_view(self) -> None:
        """Scroll the element into view."""
        ...

    def to_handle(self, selector: str = "") -> ElementHandle:
        """
        Convert this live element to a serializable ElementHandle.

        Args:
            selector: The selector that produced the element, for reference

        Returns:
            An ElementHandle with the element's current properties
        """
        attributes = {}
        for name in HANDLE_ATTRIBUTES:
            attr_value = self.get_attribute(name)
            if attr_value:
                attributes[name] = attr_value
        return ElementHandle(
            selector=selector,
            tag_name=self.tag_name,
            attributes=attributes,
            text_content=self.normalized_text()[:200],
            is_visible=self.is_displayed(),
        )


class IDocument(ABC):
    """
    Abstract interface for a queryable, rendered document.

    The document is owned by the caller. Components that receive one only
    query it and never close it.
    """

    @property
    @abstractmethod
    def url(self) -> str:
        """Get the current document URL."""
        ...

    @abstractmethod
    def goto(self, url: str, **options: Any) -> None:
        """
        Navigate to a URL.

        Args:
            url: The URL to navigate to
            **options: Engine-specific navigation options
        """
        ...

    @abstractmethod
    def find_all(self, selector: str) -> List[IElement]:
        """
        Find all elements matching an XPath selector.

        Args:
            selector: XPath expression

        Returns:
            Matching elements in document order; empty list when none match
        """
        ...

    def find_one(self, selector: str) -> IElement:
        """
        Find the first element matching an XPath selector.

        Args:
            selector: XPath expression

        Returns:
            The first match in document order

        Raises:
            ElementNotFoundError: If nothing matches
        """
        elements = self.find_all(selector)
        if not elements:
            raise ElementNotFoundError(f"No element matches {selector}", selector=selector)
        return elements[0]

    @abstractmethod
    def wait_until_visible(
        self,
        selector: str,
        timeout_ms: int,
        poll_interval_ms: int = 500,
    ) -> None:
        """
        Block until an element matching the selector is visible.

        Args:
            selector: XPath expression
            timeout_ms: Maximum time to wait in milliseconds
            poll_interval_ms: Interval between checks in milliseconds

        Raises:
            BrowserTimeoutError: If no matching element became visible in time
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close this document."""
        ...


class IBrowser(ABC):
    """
    Abstract interface for browser session management.

    Implementations handle engine-specific setup and teardown.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the browser is running."""
        ...

    @abstractmethod
    def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROME,
        **options: Any,
    ) -> None:
        """
        Launch a browser instance.

        Args:
            headless: Whether to run in headless mode
            browser_type: Type of browser to launch
            **options: Engine-specific launch options
        """
        ...

    @abstractmethod
    def new_page(self, **options: Any) -> IDocument:
        """
        Get a page to drive.

        Returns:
            A document instance
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the browser and clean up resources."""
        ...

    def __enter__(self) -> "IBrowser":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
