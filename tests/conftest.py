"""
Pytest configuration and fixtures.
"""

from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def settings():
    """Provide test settings."""
    from label_locator.config import Settings, BrowserSettings, ResolverSettings

    return Settings(
        browser=BrowserSettings(
            engine="static",
            headless=True,
        ),
        resolver=ResolverSettings(
            timeout_ms=200,  # Keep presence-gate waits short in tests
            poll_interval_ms=20,
        ),
    )


@pytest.fixture
def resolver(settings):
    """Provide a LabelResolver with short waits."""
    from label_locator.engine import LabelResolver

    return LabelResolver(settings.resolver)


@pytest.fixture
def make_document():
    """Build a StaticDocument from an HTML snippet."""
    from label_locator.browsers import StaticDocument

    def _make(html: str):
        return StaticDocument.from_html(f"<html><body>{html}</body></html>")

    return _make


@pytest.fixture
def practice_form_path() -> Path:
    """Path to the saved practice form fixture."""
    return FIXTURES_DIR / "practice_form.html"


@pytest.fixture
def practice_form(practice_form_path):
    """The practice form loaded as a StaticDocument."""
    from label_locator.browsers import StaticDocument

    return StaticDocument.from_file(practice_form_path)


@pytest.fixture
def registry():
    """Provide a clean component registry for testing."""
    from label_locator.registry import ComponentRegistry
    from label_locator.browsers import register_browsers

    ComponentRegistry.clear_all()
    register_browsers()

    yield ComponentRegistry

    # Leave the default registrations in place for other tests
    ComponentRegistry.clear_all()
    register_browsers()
