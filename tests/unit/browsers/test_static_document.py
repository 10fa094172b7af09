"""
Tests for the lxml-backed StaticDocument.
"""

import pytest

from label_locator.browsers import StaticBrowser, StaticDocument
from label_locator.exceptions import BrowserTimeoutError, ElementNotFoundError, NavigationError


class TestStaticDocument:
    """Test querying and waiting."""

    def test_find_all_in_document_order(self, make_document):
        doc = make_document('<input name="a"><div><input name="b"></div><input name="c">')

        names = [el.get_attribute("name") for el in doc.find_all("//input")]

        assert names == ["a", "b", "c"]

    def test_find_all_empty(self, make_document):
        assert make_document("<p>x</p>").find_all("//input") == []

    def test_find_one_raises_structural_miss(self, make_document):
        with pytest.raises(ElementNotFoundError) as exc_info:
            make_document("<p>x</p>").find_one("//input")

        assert exc_info.value.selector == "//input"

    def test_non_element_results_are_dropped(self, make_document):
        doc = make_document('<input name="a">')

        assert doc.find_all("//input/@name") == []

    def test_invalid_xpath(self, make_document):
        with pytest.raises(ValueError):
            make_document("<p>x</p>").find_all("//input[")

    def test_wait_returns_when_visible(self, make_document):
        make_document("<label>Here</label>").wait_until_visible("//label", timeout_ms=0)

    def test_wait_times_out(self, make_document):
        doc = make_document('<label hidden>Here</label>')

        with pytest.raises(BrowserTimeoutError) as exc_info:
            doc.wait_until_visible("//label", timeout_ms=30, poll_interval_ms=10)

        assert exc_info.value.timeout_ms == 30
        assert exc_info.value.operation == "wait_until_visible"

    def test_from_file(self, practice_form_path):
        doc = StaticDocument.from_file(practice_form_path)

        assert doc.url.startswith("file://")
        assert doc.find_one("//*[@id='fname']").tag_name == "input"

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(NavigationError):
            StaticDocument.from_file(tmp_path / "missing.html")

    def test_goto_file_path(self, practice_form_path):
        doc = StaticDocument()
        doc.goto(str(practice_form_path))

        assert doc.find_all("//form")

    def test_goto_file_url(self, practice_form_path):
        doc = StaticDocument()
        doc.goto(practice_form_path.resolve().as_uri())

        assert doc.url == practice_form_path.resolve().as_uri()


class TestStaticElement:
    """Test element reads and edits."""

    def test_normalized_text(self, make_document):
        label = make_document("<label>  First \n\t Name <b>*</b> </label>").find_one("//label")

        assert label.normalized_text() == "First Name *"

    def test_missing_attribute_is_none(self, make_document):
        label = make_document("<label>x</label>").find_one("//label")

        assert label.get_attribute("for") is None

    @pytest.mark.parametrize("html", [
        '<input type="hidden">',
        '<input hidden>',
        '<div style="display: none"><input></div>',
        '<div style="VISIBILITY:hidden"><span><input></span></div>',
    ])
    def test_hidden(self, make_document, html):
        assert make_document(html).find_one("//input").is_displayed() is False

    def test_visible(self, make_document):
        assert make_document('<div style="color: red"><input></div>').find_one("//input").is_displayed()

    def test_input_value_roundtrip(self, make_document):
        doc = make_document('<input value="old">')
        element = doc.find_one("//input")

        element.clear()
        element.type_text("new")

        assert element.value == "new"
        assert doc.find_one("//input").get_attribute("value") == "new"

    def test_type_appends(self, make_document):
        element = make_document('<input value="ab">').find_one("//input")

        element.type_text("c")

        assert element.value == "abc"

    def test_textarea_value(self, make_document):
        element = make_document("<textarea>old</textarea>").find_one("//textarea")

        element.clear()
        element.type_text("note")

        assert element.value == "note"

    def test_select_by_value_or_text(self, make_document):
        doc = make_document(
            '<select><option value="">-</option><option value="CA">California</option>'
            '<option value="NY">New York</option></select>'
        )
        element = doc.find_one("//select")

        assert element.value == ""
        element.type_text("California")
        assert element.value == "CA"
        element.type_text("NY")
        assert element.value == "NY"

    def test_to_handle(self, make_document):
        element = make_document('<input id="fn" name="first" type="text" class="x">').find_one("//input")

        handle = element.to_handle("//input")

        assert handle.selector == "//input"
        assert handle.tag_name == "input"
        assert handle.id == "fn"
        assert handle.describe() == "input#fn[name=first][type=text]"

    def test_equality_follows_node(self, make_document):
        doc = make_document('<input name="a"><input name="b">')

        assert doc.find_one("//input[@name='a']") == doc.find_all("//input")[0]
        assert doc.find_one("//input[@name='a']") != doc.find_all("//input")[1]


class TestStaticBrowser:
    """Test the no-op browser wrapper."""

    def test_lifecycle(self):
        browser = StaticBrowser()
        assert browser.is_connected is False

        browser.launch()
        assert browser.is_connected is True
        assert isinstance(browser.new_page(), StaticDocument)

        browser.close()
        assert browser.is_connected is False

    def test_context_manager_closes(self):
        with StaticBrowser() as browser:
            browser.launch()
        assert browser.is_connected is False
