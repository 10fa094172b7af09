"""
Static Document - IDocument over parsed HTML, backed by lxml.

Useful for resolving labels without a browser (saved pages, fixtures, CI
checks of form markup). There is no layout engine, so visibility is
approximated from markup: an element is hidden when it or an ancestor has
the ``hidden`` attribute or an inline ``display:none`` /
``visibility:hidden`` style, and ``<input type="hidden">`` is never visible.
"""

from pathlib import Path
from typing import Any, List, Optional, Union
from urllib.parse import urlparse
import logging
import time

import httpx
from lxml import etree
from lxml import html as lxml_html

from label_locator.exceptions.browser import NavigationError, TimeoutError as BrowserTimeoutError
from label_locator.interfaces.document import (
    BrowserType,
    IBrowser,
    IDocument,
    IElement,
    normalize_space,
)

logger = logging.getLogger(__name__)

_HIDDEN_STYLES = ("display:none", "visibility:hidden")


class StaticElement(IElement):
    """
    IElement wrapping an lxml HtmlElement.

    Typing and clearing edit the parsed tree in place, so a filled static
    document reads back the values that were entered.
    """

    def __init__(self, element: lxml_html.HtmlElement):
        self._element = element

    @property
    def raw(self) -> lxml_html.HtmlElement:
        """The wrapped lxml element."""
        return self._element

    @property
    def tag_name(self) -> str:
        return str(self._element.tag).lower()

    def get_attribute(self, name: str) -> Optional[str]:
        return self._element.get(name)

    def normalized_text(self) -> str:
        return normalize_space(self._element.text_content())

    def is_displayed(self) -> bool:
        if self.tag_name == "input" and (self._element.get("type") or "").lower() == "hidden":
            return False
        node: Optional[Any] = self._element
        while node is not None and isinstance(node.tag, str):
            if node.get("hidden") is not None:
                return False
            style = (node.get("style") or "").replace(" ", "").lower()
            if any(hidden in style for hidden in _HIDDEN_STYLES):
                return False
            node = node.getparent()
        return True

    @property
    def value(self) -> Optional[str]:
        if self.tag_name == "textarea":
            return self._element.text or ""
        if self.tag_name == "select":
            selected = self._element.xpath(".//option[@selected]") or self._element.xpath(".//option[1]")
            if not selected:
                return None
            option = selected[0]
            return option.get("value", normalize_space(option.text_content()))
        return self._element.get("value", "")

    def clear(self) -> None:
        if self.tag_name == "textarea":
            self._element.text = ""
        elif self.tag_name != "select":
            self._element.set("value", "")

    def type_text(self, text: str) -> None:
        if self.tag_name == "textarea":
            self._element.text = (self._element.text or "") + text
        elif self.tag_name == "select":
            for option in self._element.xpath(".//option"):
                if option.get("value") == text or normalize_space(option.text_content()) == text:
                    option.set("selected", "selected")
                elif option.get("selected") is not None:
                    del option.attrib["selected"]
        else:
            self._element.set("value", (self._element.get("value") or "") + text)

    def scroll_into_view(self) -> None:
        # No viewport to scroll
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, StaticElement) and other._element is self._element

    def __hash__(self) -> int:
        return id(self._element)

    def __repr__(self) -> str:
        return f"StaticElement({self.to_handle().describe()})"


class StaticDocument(IDocument):
    """
    IDocument over a parsed HTML tree.

    Example:
        >>> doc = StaticDocument.from_html('<label for="fn">First Name</label><input id="fn">')
        >>> doc.find_one("//input").get_attribute("id")
        'fn'
    """

    def __init__(self, html: str = "<html><body></body></html>", url: str = "about:blank"):
        self._url = url
        self._tree = lxml_html.document_fromstring(html)

    @classmethod
    def from_html(cls, html: str, url: str = "about:blank") -> "StaticDocument":
        return cls(html, url=url)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StaticDocument":
        path = Path(path)
        try:
            html = path.read_text(encoding="utf-8")
        except OSError as e:
            raise NavigationError(f"Failed to read {path}: {e}", url=str(path))
        return cls(html, url=path.resolve().as_uri())

    @property
    def url(self) -> str:
        return self._url

    def goto(self, url: str, **options: Any) -> None:
        """
        Load a document from a file path, ``file://`` URL or http(s) URL.
        """
        parsed = urlparse(url)
        if parsed.scheme in ("http", "https"):
            try:
                response = httpx.get(url, follow_redirects=True, timeout=options.get("timeout", 30.0))
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise NavigationError(f"Failed to navigate to {url}: {e}", url=url)
            self._tree = lxml_html.document_fromstring(response.text)
            self._url = str(response.url)
        else:
            path = Path(parsed.path) if parsed.scheme == "file" else Path(url)
            loaded = StaticDocument.from_file(path)
            self._tree = loaded._tree
            self._url = loaded.url
        logger.debug(f"Loaded static document {self._url}")

    def content(self) -> str:
        """Serialize the current tree back to HTML."""
        return lxml_html.tostring(self._tree, encoding="unicode")

    def find_all(self, selector: str) -> List[IElement]:
        try:
            nodes = self._tree.xpath(selector)
        except etree.XPathError as e:
            raise ValueError(f"Invalid XPath {selector!r}: {e}") from e
        return [StaticElement(node) for node in nodes if isinstance(node, lxml_html.HtmlElement)]

    def wait_until_visible(
        self,
        selector: str,
        timeout_ms: int,
        poll_interval_ms: int = 500,
    ) -> None:
        deadline = time.monotonic() + timeout_ms / 1000
        while True:
            if any(element.is_displayed() for element in self.find_all(selector)):
                return
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise BrowserTimeoutError(
                    f"No visible element for {selector} after {timeout_ms}ms",
                    timeout_ms=timeout_ms,
                    operation="wait_until_visible",
                )
            time.sleep(min(poll_interval_ms / 1000, remaining))

    def close(self) -> None:
        return None


class StaticBrowser(IBrowser):
    """
    IBrowser that hands out StaticDocuments. No process is launched.
    """

    def __init__(self):
        self._launched = False

    @property
    def is_connected(self) -> bool:
        return self._launched

    def launch(
        self,
        headless: bool = True,
        browser_type: BrowserType = BrowserType.CHROME,
        **options: Any,
    ) -> None:
        self._launched = True

    def new_page(self, **options: Any) -> IDocument:
        return StaticDocument()

    def close(self) -> None:
        self._launched = False
