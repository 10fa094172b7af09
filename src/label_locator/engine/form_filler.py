"""
Form Filler - fill a table of label/value pairs into a document.

For each field the label is resolved to its input, the input is scrolled
into view, cleared, typed into, and its value read back to confirm the
entry. A label that resolves to nothing can optionally be retried as a
whole (the page may still be rendering).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING
import logging

import yaml

from label_locator.config.settings import FormSettings
from label_locator.engine.label_resolver import LabelResolver, LabelStrategy, ResolvedLabel
from label_locator.exceptions import (
    ConfigurationError,
    FieldValueMismatchError,
    LabelLocatorError,
    LabelNotFoundError,
)
from label_locator.utils.retry import RetryConfig, call_with_retry

if TYPE_CHECKING:
    from label_locator.interfaces.document import IDocument

logger = logging.getLogger(__name__)


@dataclass
class FieldSpec:
    """A label and the value to enter for it."""
    label: str
    value: str


@dataclass
class FieldResult:
    """Outcome of filling one field."""
    label: str
    value: str
    success: bool
    strategy: Optional[LabelStrategy] = None
    actual_value: Optional[str] = None
    error: Optional[str] = None


class FormFiller:
    """
    Fill fields located by their label text.

    Usage:
        filler = FormFiller(LabelResolver())
        results = filler.fill(page, [FieldSpec("First Name", "Ada")])
    """

    def __init__(
        self,
        resolver: Optional[LabelResolver] = None,
        settings: Optional[FormSettings] = None,
    ):
        self.resolver = resolver or LabelResolver()
        self.settings = settings or FormSettings()

    def fill_field(
        self,
        document: "IDocument",
        label: str,
        value: str,
        timeout_ms: Optional[int] = None,
    ) -> ResolvedLabel:
        """
        Resolve one label and type a value into its input.

        Returns:
            The resolution that was used

        Raises:
            LabelNotVisibleError, LabelNotFoundError: resolution failed
            FieldValueMismatchError: the value read back differs
        """
        resolved = self._locate(document, label, timeout_ms)
        element = resolved.element

        if self.settings.scroll_into_view:
            element.scroll_into_view()
        if self.settings.clear_before_typing:
            element.clear()
        element.type_text(value)

        if self.settings.verify_values:
            actual = element.value
            if actual != value:
                raise FieldValueMismatchError(label, value, actual)

        logger.info(f"Filled '{label}' via {resolved.strategy.value}")
        return resolved

    def fill(
        self,
        document: "IDocument",
        fields: List[FieldSpec],
        timeout_ms: Optional[int] = None,
    ) -> List[FieldResult]:
        """
        Fill several fields in order.

        Failures are recorded in the results. With stop_on_error set, the
        first failure ends the run and the remaining fields are not reported.
        """
        results: List[FieldResult] = []
        for field in fields:
            try:
                resolved = self.fill_field(document, field.label, field.value, timeout_ms)
            except FieldValueMismatchError as e:
                logger.error(str(e))
                results.append(FieldResult(
                    label=field.label,
                    value=field.value,
                    success=False,
                    actual_value=e.actual,
                    error=e.message,
                ))
            except LabelLocatorError as e:
                logger.error(str(e))
                results.append(FieldResult(
                    label=field.label,
                    value=field.value,
                    success=False,
                    error=e.message,
                ))
            else:
                results.append(FieldResult(
                    label=field.label,
                    value=field.value,
                    success=True,
                    strategy=resolved.strategy,
                    actual_value=resolved.element.value if self.settings.verify_values else None,
                ))
                continue

            if self.settings.stop_on_error:
                break

        return results

    def _locate(self, document: "IDocument", label: str, timeout_ms: Optional[int]) -> ResolvedLabel:
        if self.settings.retry_attempts <= 0:
            return self.resolver.locate(document, label, timeout_ms)
        config = RetryConfig(
            max_attempts=self.settings.retry_attempts + 1,
            initial_delay_ms=self.settings.retry_delay_ms,
            retry_on=(LabelNotFoundError,),
        )
        return call_with_retry(self.resolver.locate, config, document, label, timeout_ms)


def load_fields(path: Union[str, Path]) -> List[FieldSpec]:
    """
    Load a field-value table from YAML.

    Accepts either a mapping (``First Name: Ada``) or a list of
    ``{label: ..., value: ...}`` entries. Values are converted to strings.
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data: Any = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read fields file {path}: {e}", {"path": str(path)})
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", {"path": str(path)})

    if isinstance(data, dict):
        return [FieldSpec(str(label), str(value)) for label, value in data.items()]

    if isinstance(data, list):
        fields = []
        for index, entry in enumerate(data):
            if not isinstance(entry, dict) or "label" not in entry or "value" not in entry:
                raise ConfigurationError(
                    f"Entry {index} in {path} needs 'label' and 'value'",
                    {"path": str(path), "entry": entry},
                )
            fields.append(FieldSpec(str(entry["label"]), str(entry["value"])))
        return fields

    raise ConfigurationError(f"Fields file {path} must be a mapping or a list", {"path": str(path)})


def fields_from_pairs(pairs: Dict[str, str]) -> List[FieldSpec]:
    """Build FieldSpecs from a plain dict, preserving order."""
    return [FieldSpec(label, value) for label, value in pairs.items()]
