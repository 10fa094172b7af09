"""
Tests for LabelResolver - ordered label-to-input resolution.
"""

import time
from unittest.mock import MagicMock

import pytest

from label_locator.browsers import StaticDocument
from label_locator.config import ResolverSettings
from label_locator.engine import LabelResolver, LabelStrategy, ResolvedLabel
from label_locator.engine import selectors
from label_locator.exceptions import (
    BrowserTimeoutError,
    ElementNotFoundError,
    LabelNotFoundError,
    LabelNotVisibleError,
)


# =============================================================================
# MOCK FIXTURES
# =============================================================================

class RecordingDocument(StaticDocument):
    """StaticDocument that records every query it answers."""

    def __init__(self, html: str):
        super().__init__(f"<html><body>{html}</body></html>")
        self.queries = []

    def find_all(self, selector):
        self.queries.append(selector)
        return super().find_all(selector)


def _mock_element(**attrs):
    element = MagicMock()
    element.get_attribute.side_effect = lambda name: attrs.get(name)
    return element


# =============================================================================
# TESTS
# =============================================================================

class TestStrategyOrder:
    """Each strategy wins when the ones before it miss."""

    def test_explicit_for_wins(self, resolver, make_document):
        """for/id association beats a closer following input."""
        doc = make_document(
            '<label for="fn">First Name</label>'
            '<input id="decoy">'
            '<input id="fn">'
        )

        result = resolver.locate(doc, "First Name")

        assert result.strategy == LabelStrategy.EXPLICIT_FOR
        assert result.element.get_attribute("id") == "fn"

    def test_explicit_for_targets_any_element(self, resolver, make_document):
        """The id lookup is not limited to input-like elements."""
        doc = make_document('<label for="widget">Rating</label><div id="widget"></div><input id="after">')

        result = resolver.locate(doc, "Rating")

        assert result.strategy == LabelStrategy.EXPLICIT_FOR
        assert result.element.tag_name == "div"

    def test_missing_for_target_falls_through(self, resolver, make_document):
        """A for attribute pointing nowhere is a soft miss."""
        doc = make_document('<label for="nope">Email</label><input type="email" id="e">')

        result = resolver.locate(doc, "Email")

        assert result.strategy == LabelStrategy.FOLLOWING_INPUT
        assert result.element.get_attribute("id") == "e"

    def test_empty_for_falls_through(self, resolver, make_document):
        """An empty for attribute is treated as absent."""
        doc = make_document('<label for="">Email</label><input id="e">')

        result = resolver.locate(doc, "Email")

        assert result.strategy == LabelStrategy.FOLLOWING_INPUT

    def test_following_input_in_same_container(self, resolver, make_document):
        """<div><label>Email</label><input type="email"></div>."""
        doc = make_document('<div><label>Email</label><input type="email" name="email"></div>')

        result = resolver.locate(doc, "Email")

        assert result.strategy == LabelStrategy.FOLLOWING_INPUT
        assert result.element.get_attribute("name") == "email"

    def test_following_input_not_scoped_to_container(self, resolver, make_document):
        """Proximity follows document order across containers."""
        doc = make_document(
            '<div class="row"><div><label>Phone</label></div></div>'
            '<div class="row"><span><input name="phone"></span></div>'
            '<input name="later">'
        )

        result = resolver.locate(doc, "Phone")

        assert result.strategy == LabelStrategy.FOLLOWING_INPUT
        assert result.element.get_attribute("name") == "phone"

    def test_inputs_before_label_are_ignored(self, resolver, make_document):
        doc = make_document('<input name="before"><label>Zip</label><input name="after">')

        result = resolver.locate(doc, "Zip")

        assert result.element.get_attribute("name") == "after"

    def test_nested_input(self, resolver, make_document):
        """<label>Text <input/></label> with nothing after it."""
        doc = make_document('<input name="before"><label>Nickname <input name="nick"></label>')

        result = resolver.locate(doc, "Nickname")

        assert result.strategy == LabelStrategy.NESTED_INPUT
        assert result.element.get_attribute("name") == "nick"

    def test_following_is_tried_before_nested(self, resolver, make_document):
        """A later input beats the one wrapped by the label."""
        doc = make_document('<label>City <input name="inner"></label><input name="outer">')

        result = resolver.locate(doc, "City")

        assert result.strategy == LabelStrategy.FOLLOWING_INPUT
        assert result.element.get_attribute("name") == "outer"

    def test_attribute_match_placeholder(self, resolver, make_document):
        doc = make_document('<input name="zip" placeholder="Zip Code"><label>Zip Code</label>')

        result = resolver.locate(doc, "Zip Code")

        assert result.strategy == LabelStrategy.ATTRIBUTE_MATCH
        assert result.element.get_attribute("name") == "zip"

    def test_attribute_match_aria_label(self, resolver, make_document):
        doc = make_document('<input name="q" aria-label="Search"><label>Search</label>')

        result = resolver.locate(doc, "Search")

        assert result.strategy == LabelStrategy.ATTRIBUTE_MATCH
        assert result.element.get_attribute("name") == "q"

    def test_attribute_match_is_exact(self, resolver, make_document):
        """Placeholder must equal the label text, not contain it."""
        doc = make_document('<input placeholder="Zip Code (5 digits)"><label>Zip Code</label>')

        with pytest.raises(LabelNotFoundError):
            resolver.locate(doc, "Zip Code")


class TestInputLike:
    """Which elements count as inputs."""

    def test_hidden_input_skipped(self, resolver, make_document):
        doc = make_document(
            '<label>Token</label><input type="hidden" name="csrf"><input name="real">'
        )

        result = resolver.locate(doc, "Token")

        assert result.element.get_attribute("name") == "real"

    def test_hidden_type_is_case_insensitive(self, resolver, make_document):
        doc = make_document('<label>Token</label><input type="HIDDEN" name="csrf"><input name="real">')

        assert resolver.resolve(doc, "Token").get_attribute("name") == "real"

    def test_textarea(self, resolver, make_document):
        doc = make_document('<label>Comments</label><textarea name="comments"></textarea>')

        assert resolver.resolve(doc, "Comments").tag_name == "textarea"

    def test_select(self, resolver, make_document):
        doc = make_document('<label>Country</label><select name="country"><option>NZ</option></select>')

        assert resolver.resolve(doc, "Country").tag_name == "select"

    def test_buttons_are_not_inputs(self, resolver, make_document):
        doc = make_document('<label>Notes</label><button>Go</button><textarea name="notes"></textarea>')

        assert resolver.resolve(doc, "Notes").get_attribute("name") == "notes"


class TestLabelMatching:
    """Label text matching semantics."""

    def test_substring_tolerates_required_marker(self, resolver, make_document):
        doc = make_document('<label for="e">Email <span>*</span></label><input id="e">')

        assert resolver.resolve(doc, "Email").get_attribute("id") == "e"

    def test_whitespace_is_normalized(self, resolver, make_document):
        doc = make_document('<label for="fn">\n   First\n\t  Name  </label><input id="fn">')

        assert resolver.resolve(doc, "First Name").get_attribute("id") == "fn"

    def test_label_text_with_both_quote_kinds(self, resolver, make_document):
        doc = make_document(
            '<label for="nick">Owner\'s "nick" name</label><input id="nick">'
        )

        element = resolver.resolve(doc, 'Owner\'s "nick"')

        assert element.get_attribute("id") == "nick"

    def test_attribute_match_with_apostrophe(self, resolver, make_document):
        doc = make_document(
            '<input name="m" placeholder="Mother\'s name"><label>Mother\'s name</label>'
        )

        result = resolver.locate(doc, "Mother's name")

        assert result.strategy == LabelStrategy.ATTRIBUTE_MATCH

    def test_first_matching_label_wins(self, resolver, make_document):
        """'Name' matches both labels; the first in document order is used."""
        doc = make_document(
            '<label for="first">First Name</label><input id="first">'
            '<label for="last">Last Name</label><input id="last">'
        )

        assert resolver.resolve(doc, "Name").get_attribute("id") == "first"

    def test_invisible_first_label_still_read_for_explicit(self, resolver, make_document):
        """The gate needs any visible match; strategies use the first match."""
        doc = make_document(
            '<label for="a" hidden>Code</label><input id="a">'
            '<label for="b">Code</label><input id="b">'
        )

        assert resolver.resolve(doc, "Code").get_attribute("id") == "a"


class TestPresenceGate:
    """The visible-label wait that precedes every strategy."""

    def test_absent_label_times_out(self, make_document):
        resolver = LabelResolver(ResolverSettings(timeout_ms=100, poll_interval_ms=20))
        doc = make_document('<label for="fn">First Name</label><input id="fn">')

        start = time.monotonic()
        with pytest.raises(LabelNotVisibleError) as exc_info:
            resolver.resolve(doc, "Mobile Number")
        elapsed = time.monotonic() - start

        assert elapsed >= 0.1
        assert exc_info.value.label_text == "Mobile Number"
        assert exc_info.value.timeout_ms == 100
        assert not isinstance(exc_info.value, LabelNotFoundError)

    def test_no_strategy_runs_after_timeout(self, resolver):
        doc = RecordingDocument('<input placeholder="Mobile Number">')

        with pytest.raises(LabelNotVisibleError):
            resolver.resolve(doc, "Mobile Number", timeout_ms=50)

        label_query = selectors.label_query("Mobile Number")
        assert doc.queries
        assert set(doc.queries) == {label_query}

    def test_hidden_label_times_out(self, resolver, make_document):
        doc = make_document(
            '<div style="display:none"><label for="p">Promo</label></div><input id="p">'
        )

        with pytest.raises(LabelNotVisibleError):
            resolver.resolve(doc, "Promo", timeout_ms=50)

    def test_explicit_timeout_overrides_settings(self):
        document = MagicMock()
        document.wait_until_visible.side_effect = BrowserTimeoutError("late", timeout_ms=1234)
        resolver = LabelResolver(ResolverSettings(timeout_ms=9000, poll_interval_ms=250))

        with pytest.raises(LabelNotVisibleError):
            resolver.resolve(document, "Email", timeout_ms=1234)

        document.wait_until_visible.assert_called_once_with(
            selectors.label_query("Email"), timeout_ms=1234, poll_interval_ms=250,
        )
        document.find_all.assert_not_called()
        document.find_one.assert_not_called()

    def test_default_timeout_from_settings(self):
        document = MagicMock()
        document.find_one.return_value = _mock_element(**{"for": "e"})
        document.find_all.return_value = [_mock_element(id="e")]
        resolver = LabelResolver()

        resolver.resolve(document, "Email")

        _, kwargs = document.wait_until_visible.call_args
        assert kwargs["timeout_ms"] == 10000
        assert kwargs["poll_interval_ms"] == 500

    def test_relaxed_gate_reaches_attribute_match(self, make_document):
        """With require_visible_label off, attribute-only forms resolve."""
        resolver = LabelResolver(ResolverSettings(timeout_ms=50, poll_interval_ms=10, require_visible_label=False))
        doc = make_document('<input name="m" placeholder="Mobile Number">')

        result = resolver.locate(doc, "Mobile Number")

        assert result.strategy == LabelStrategy.ATTRIBUTE_MATCH
        assert result.element.get_attribute("name") == "m"

    def test_relaxed_gate_still_times_out_without_attribute(self, make_document):
        resolver = LabelResolver(ResolverSettings(timeout_ms=50, poll_interval_ms=10, require_visible_label=False))
        doc = make_document('<input name="m" placeholder="Phone">')

        with pytest.raises(LabelNotVisibleError):
            resolver.resolve(doc, "Mobile Number")

    def test_strict_gate_blocks_attribute_only_forms(self, make_document):
        resolver = LabelResolver(ResolverSettings(timeout_ms=50, poll_interval_ms=10))
        doc = make_document('<input name="m" placeholder="Mobile Number">')

        with pytest.raises(LabelNotVisibleError):
            resolver.resolve(doc, "Mobile Number")


class TestExhaustion:
    """Terminal NotFound after every strategy misses."""

    def test_not_found_after_all_strategies(self, resolver):
        doc = RecordingDocument('<input name="before"><label>Orphan</label><p>nothing here</p>')

        with pytest.raises(LabelNotFoundError) as exc_info:
            resolver.resolve(doc, "Orphan")

        error = exc_info.value
        assert error.label_text == "Orphan"
        assert error.attempted == [strategy.value for strategy in resolver.strategies]
        assert error.details["reason"] == "no strategy matched"
        assert selectors.attribute_input_query("Orphan") in doc.queries
        assert selectors.nested_input_query("Orphan") in doc.queries
        assert selectors.following_input_query("Orphan") in doc.queries

    def test_structural_miss_is_soft(self):
        """An adapter raising ElementNotFoundError only skips that strategy."""
        following = _mock_element(name="after")
        document = MagicMock()
        document.find_one.side_effect = ElementNotFoundError("gone", selector="//label")
        document.find_all.side_effect = (
            lambda selector: [following] if "following::" in selector else []
        )

        result = LabelResolver().locate(document, "Email", timeout_ms=10)

        assert result.strategy == LabelStrategy.FOLLOWING_INPUT
        assert result.element is following

    def test_other_errors_propagate(self):
        document = MagicMock()
        document.find_one.side_effect = RuntimeError("session died")

        with pytest.raises(RuntimeError):
            LabelResolver().resolve(document, "Email", timeout_ms=10)


class TestResolverContract:
    """Return values and statelessness."""

    def test_resolve_returns_element_of_locate(self, resolver, make_document):
        doc = make_document('<label for="fn">First Name</label><input id="fn">')

        element = resolver.resolve(doc, "First Name")
        located = resolver.locate(doc, "First Name")

        assert element == located.element
        assert isinstance(located, ResolvedLabel)
        assert located.label_text == "First Name"
        assert located.selector == selectors.id_query("fn")
        assert located.elapsed_ms >= 0

    def test_idempotent(self, resolver, make_document):
        doc = make_document('<div><label>Email</label><input type="email" name="email"></div>')

        first = resolver.locate(doc, "Email")
        second = resolver.locate(doc, "Email")

        assert first.strategy == second.strategy
        assert first.element == second.element

    def test_resolution_does_not_modify_document(self, resolver, make_document):
        doc = make_document('<label>Email</label><input name="email" value="kept">')
        before = doc.content()

        resolver.resolve(doc, "Email")

        assert doc.content() == before

    def test_strategy_order(self, resolver):
        assert resolver.strategies == [
            LabelStrategy.EXPLICIT_FOR,
            LabelStrategy.FOLLOWING_INPUT,
            LabelStrategy.NESTED_INPUT,
            LabelStrategy.ATTRIBUTE_MATCH,
        ]
