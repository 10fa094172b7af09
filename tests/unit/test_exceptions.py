"""
Tests for custom exceptions.
"""

import pytest

from label_locator.exceptions import (
    BrowserError,
    BrowserLaunchError,
    BrowserTimeoutError,
    ConfigurationError,
    ElementNotFoundError,
    FieldValueMismatchError,
    FormError,
    LabelLocatorError,
    LabelNotFoundError,
    LabelNotVisibleError,
    NavigationError,
    PageError,
    ResolutionError,
)


class TestLabelLocatorError:
    """Test the base LabelLocatorError exception."""

    def test_create_base_error(self):
        error = LabelLocatorError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.details == {}

    def test_details_in_str(self):
        error = LabelLocatorError("Bad", {"key": "value"})
        assert str(error) == "Bad - Details: {'key': 'value'}"

    def test_base_error_is_exception(self):
        assert issubclass(LabelLocatorError, Exception)


class TestHierarchy:
    """Every library error can be caught through the base class."""

    @pytest.mark.parametrize("error_class", [
        ConfigurationError,
        BrowserError,
        ResolutionError,
        FormError,
    ])
    def test_top_level_branches(self, error_class):
        assert issubclass(error_class, LabelLocatorError)

    def test_browser_branch(self):
        assert issubclass(BrowserLaunchError, BrowserError)
        assert issubclass(PageError, BrowserError)
        assert issubclass(NavigationError, PageError)
        assert issubclass(ElementNotFoundError, PageError)
        assert issubclass(BrowserTimeoutError, PageError)

    def test_resolution_branch(self):
        assert issubclass(LabelNotVisibleError, ResolutionError)
        assert issubclass(LabelNotFoundError, ResolutionError)
        assert issubclass(FieldValueMismatchError, FormError)

    def test_timeout_does_not_shadow_builtin(self):
        assert BrowserTimeoutError is not TimeoutError


class TestBrowserErrors:
    """Test browser and document errors."""

    def test_element_not_found_keeps_selector(self):
        error = ElementNotFoundError("No element matches //input", selector="//input")
        assert error.selector == "//input"
        assert error.details == {"selector": "//input"}

    def test_navigation_error_keeps_url(self):
        error = NavigationError("Failed", url="https://example.com")
        assert error.url == "https://example.com"

    def test_timeout_error(self):
        error = BrowserTimeoutError("Timed out", timeout_ms=5000, operation="wait_until_visible")
        assert error.timeout_ms == 5000
        assert error.operation == "wait_until_visible"


class TestResolutionErrors:
    """Test the two failure kinds of label resolution."""

    def test_label_not_visible(self):
        error = LabelNotVisibleError("Mobile Number", timeout_ms=10000)

        assert error.label_text == "Mobile Number"
        assert error.timeout_ms == 10000
        assert error.details["label_text"] == "Mobile Number"
        assert error.details["reason"] == "no visible label contains this text"
        assert "Mobile Number" in str(error)

    def test_label_not_found(self):
        error = LabelNotFoundError("Terms", attempted=["explicit_for", "following_input"])

        assert error.label_text == "Terms"
        assert error.attempted == ["explicit_for", "following_input"]
        assert error.details["reason"] == "no strategy matched"
        assert error.message == "Could not locate input field for label: 'Terms' using any strategy"

    def test_label_not_found_defaults(self):
        assert LabelNotFoundError("Terms").attempted == []

    def test_failure_kinds_are_distinguishable(self):
        with pytest.raises(LabelNotVisibleError):
            try:
                raise LabelNotVisibleError("x", 10)
            except LabelNotFoundError:
                pytest.fail("not-visible must not be caught as not-found")

    def test_field_value_mismatch(self):
        error = FieldValueMismatchError("Email", expected="a@b.c", actual="a@b")

        assert error.label == "Email"
        assert error.expected == "a@b.c"
        assert error.actual == "a@b"
        assert error.message == "Failed to enter text for field labeled 'Email'"
