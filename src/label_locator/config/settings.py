"""
Settings - Pydantic models for type-safe configuration.

This module defines all configuration settings as Pydantic models,
providing validation, type hints, and automatic environment variable loading.

Example:
    >>> from label_locator.config import Settings, load_config
    >>> settings = load_config()  # Loads from env, yaml, and defaults
    >>> print(settings.resolver.timeout_ms)
    10000
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrowserSettings(BaseModel):
    """
    Browser session settings.

    Attributes:
        engine: Document engine to use
        browser_type: Browser to launch (ignored by the static engine)
        headless: Run browser in headless mode
        page_load_timeout_ms: Timeout for navigation
        window_width: Browser window width in pixels
        window_height: Browser window height in pixels
        start_maximized: Maximize the window on launch (Selenium/Chrome only)
        driver_path: Explicit WebDriver binary path (Selenium only)
    """
    engine: Literal["selenium", "playwright", "static"] = "selenium"
    browser_type: Literal["chrome", "firefox", "edge", "chromium", "webkit"] = "chrome"
    headless: bool = True
    page_load_timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    window_width: int = Field(default=1280, ge=320, le=3840)
    window_height: int = Field(default=720, ge=240, le=2160)
    start_maximized: bool = False
    driver_path: Optional[str] = None


class ResolverSettings(BaseModel):
    """
    Label resolution settings.

    Attributes:
        timeout_ms: Default bound for the visible-label wait
        poll_interval_ms: Interval at which the document is polled while waiting
        require_visible_label: When False, a label that never becomes visible
            falls through to the placeholder/aria-label strategy instead of
            failing immediately
    """
    timeout_ms: int = Field(default=10000, ge=0, le=300000)
    poll_interval_ms: int = Field(default=500, ge=10, le=10000)
    require_visible_label: bool = True


class FormSettings(BaseModel):
    """
    Form filling settings.

    Attributes:
        stop_on_error: Stop at the first field that fails
        verify_values: Read each value back after typing it
        clear_before_typing: Clear the field before typing
        scroll_into_view: Scroll each field into view before interacting
        retry_attempts: Extra attempts at resolving a label that was not found
        retry_delay_ms: Initial delay between resolve attempts
    """
    stop_on_error: bool = False
    verify_values: bool = True
    clear_before_typing: bool = True
    scroll_into_view: bool = True
    retry_attempts: int = Field(default=0, ge=0, le=10)
    retry_delay_ms: int = Field(default=500, ge=0, le=30000)


class LoggingSettings(BaseModel):
    """
    Logging configuration.

    Attributes:
        level: Log level
        file: Log file path (None for console only)
        json_format: Use JSON format for file logs
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None
    json_format: bool = False


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.

    Settings are loaded in this priority order (highest to lowest):
    1. Explicit values passed to constructor
    2. Environment variables (prefixed with LABEL_LOCATOR__)
    3. Config file (YAML)
    4. Default values

    Example:
        >>> settings = Settings()  # Load from env vars
        >>> settings = Settings(resolver=ResolverSettings(timeout_ms=2000))
    """

    model_config = SettingsConfigDict(
        env_prefix="LABEL_LOCATOR__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    resolver: ResolverSettings = Field(default_factory=ResolverSettings)
    form: FormSettings = Field(default_factory=FormSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.

        Args:
            overrides: Dictionary of values to override

        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()

        def deep_merge(base: dict, updates: dict) -> dict:
            for key, value in updates.items():
                if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                    deep_merge(base[key], value)
                else:
                    base[key] = value
            return base

        merged = deep_merge(current, overrides)
        return Settings(**merged)
