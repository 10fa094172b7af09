"""
Label Resolver - find the input control a visible label text refers to.

A presence gate waits (bounded) for a visible <label> containing the text,
then the strategies below run in order and the first hit wins:

1. EXPLICIT_FOR    - label's ``for`` attribute -> element with that id
2. FOLLOWING_INPUT - first input-like element after the label in document order
3. NESTED_INPUT    - input-like element inside the label
4. ATTRIBUTE_MATCH - input whose placeholder or aria-label equals the text

If the label never becomes visible, LabelNotVisibleError is raised and no
strategy runs. If every strategy misses, LabelNotFoundError is raised.

Several labels may contain the same text ("Name" is inside both "First Name"
and "Last Name"). The first one in document order is used and no ambiguity
is reported.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING
import logging
import time

from label_locator.config.settings import ResolverSettings
from label_locator.engine import selectors
from label_locator.exceptions.browser import ElementNotFoundError, TimeoutError as BrowserTimeoutError
from label_locator.exceptions.resolution import LabelNotFoundError, LabelNotVisibleError

if TYPE_CHECKING:
    from label_locator.interfaces.document import IDocument, IElement

logger = logging.getLogger(__name__)


class LabelStrategy(Enum):
    """Which strategy resolved the label."""
    EXPLICIT_FOR = "explicit_for"         # <label for=x> -> #x
    FOLLOWING_INPUT = "following_input"   # next input in document order
    NESTED_INPUT = "nested_input"         # <label>Text <input></label>
    ATTRIBUTE_MATCH = "attribute_match"   # placeholder / aria-label


@dataclass
class ResolvedLabel:
    """An input element resolved from a label text."""
    element: "IElement"
    strategy: LabelStrategy
    label_text: str
    selector: str
    elapsed_ms: float = 0.0


StrategyFn = Callable[["IDocument", str], Optional[Tuple["IElement", str]]]


class LabelResolver:
    """
    Resolve label text to an input element.

    The resolver holds no per-call state. The document is only read: nothing
    is clicked, typed or scrolled.

    Usage:
        resolver = LabelResolver()
        element = resolver.resolve(page, "First Name", timeout_ms=10000)
        element.type_text("Ada")
    """

    def __init__(self, settings: Optional[ResolverSettings] = None):
        self.settings = settings or ResolverSettings()
        self._strategies: List[Tuple[LabelStrategy, StrategyFn]] = [
            (LabelStrategy.EXPLICIT_FOR, self._try_explicit_for),
            (LabelStrategy.FOLLOWING_INPUT, self._try_following_input),
            (LabelStrategy.NESTED_INPUT, self._try_nested_input),
            (LabelStrategy.ATTRIBUTE_MATCH, self._try_attribute_match),
        ]

    @property
    def strategies(self) -> List[LabelStrategy]:
        """Strategies in the order they are tried."""
        return [strategy for strategy, _ in self._strategies]

    def resolve(
        self,
        document: "IDocument",
        label_text: str,
        timeout_ms: Optional[int] = None,
    ) -> "IElement":
        """
        Resolve a label to its input element.

        Args:
            document: Document to query
            label_text: Visible label text (substring match)
            timeout_ms: Bound for the visible-label wait; settings default if None

        Returns:
            The input element

        Raises:
            LabelNotVisibleError: No visible label contained the text in time
            LabelNotFoundError: No strategy found an input for the label
        """
        return self.locate(document, label_text, timeout_ms).element

    def locate(
        self,
        document: "IDocument",
        label_text: str,
        timeout_ms: Optional[int] = None,
    ) -> ResolvedLabel:
        """
        Resolve a label and report which strategy matched.

        Same contract as resolve().
        """
        timeout = self.settings.timeout_ms if timeout_ms is None else timeout_ms
        start = time.monotonic()

        strategies = self._strategies
        if not self._wait_for_label(document, label_text, timeout):
            if self.settings.require_visible_label:
                logger.warning(f"No visible label contains '{label_text}' after {timeout}ms")
                raise LabelNotVisibleError(label_text, timeout)
            logger.debug(f"No visible label for '{label_text}', trying attributes only")
            strategies = [
                (strategy, fn) for strategy, fn in self._strategies
                if strategy is LabelStrategy.ATTRIBUTE_MATCH
            ]

        attempted: List[str] = []
        for strategy, try_strategy in strategies:
            attempted.append(strategy.value)
            try:
                hit = try_strategy(document, label_text)
            except ElementNotFoundError as e:
                logger.debug(f"{strategy.value} missed for '{label_text}': {e}")
                continue
            if hit is None:
                logger.debug(f"{strategy.value} missed for '{label_text}'")
                continue

            element, selector = hit
            elapsed = (time.monotonic() - start) * 1000
            logger.info(f"{strategy.value.upper()} found '{label_text}' with: {selector} ({elapsed:.0f}ms)")
            return ResolvedLabel(
                element=element,
                strategy=strategy,
                label_text=label_text,
                selector=selector,
                elapsed_ms=elapsed,
            )

        if len(attempted) < len(self._strategies):
            # Relaxed gate: the label never showed up and attributes missed too
            raise LabelNotVisibleError(label_text, timeout)

        logger.warning(f"Could not resolve label: '{label_text}' (tried {', '.join(attempted)})")
        raise LabelNotFoundError(label_text, attempted)

    def _wait_for_label(self, document: "IDocument", label_text: str, timeout_ms: int) -> bool:
        """Presence gate. True once a matching label is visible."""
        try:
            document.wait_until_visible(
                selectors.label_query(label_text),
                timeout_ms=timeout_ms,
                poll_interval_ms=self.settings.poll_interval_ms,
            )
        except BrowserTimeoutError:
            return False
        return True

    def _first(self, document: "IDocument", selector: str) -> Optional[Tuple["IElement", str]]:
        elements = document.find_all(selector)
        if not elements:
            return None
        return elements[0], selector

    def _try_explicit_for(self, document: "IDocument", label_text: str) -> Optional[Tuple["IElement", str]]:
        label = document.find_one(selectors.label_query(label_text))
        target_id = label.get_attribute("for")
        if not target_id:
            return None
        return self._first(document, selectors.id_query(target_id))

    def _try_following_input(self, document: "IDocument", label_text: str) -> Optional[Tuple["IElement", str]]:
        return self._first(document, selectors.following_input_query(label_text))

    def _try_nested_input(self, document: "IDocument", label_text: str) -> Optional[Tuple["IElement", str]]:
        return self._first(document, selectors.nested_input_query(label_text))

    def _try_attribute_match(self, document: "IDocument", label_text: str) -> Optional[Tuple["IElement", str]]:
        return self._first(document, selectors.attribute_input_query(label_text))
