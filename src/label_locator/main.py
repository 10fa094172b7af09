"""
Label Locator - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--engine, --timeout-ms, etc.)
    2. Environment variables (LABEL_LOCATOR__BROWSER__ENGINE, etc.)
    3. Config file (label-locator.yaml / config.yaml)

Usage:
    label-locator resolve "First Name" "Email" --url https://example.com/form
    label-locator resolve "First Name" --html saved_form.html
    label-locator fill --url https://example.com/form --fields fields.yaml --visible
"""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from label_locator import __version__
from label_locator.browsers import StaticBrowser, StaticDocument, launch_browser
from label_locator.config import load_config
from label_locator.config.settings import Settings
from label_locator.engine import FormFiller, LabelResolver, load_fields
from label_locator.exceptions import ConfigurationError, LabelLocatorError, ResolutionError
from label_locator.interfaces.document import IBrowser, IDocument
from label_locator.utils.logging import setup_logging

app = typer.Typer(
    name="label-locator",
    help="Find form inputs by their visible label text",
    add_completion=False,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"label-locator {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Find form inputs by their visible label text."""


def _load_settings(
    config: Optional[Path],
    engine: Optional[str],
    visible: bool,
    timeout_ms: Optional[int],
    verbose: bool,
) -> Settings:
    overrides: dict = {}
    if engine:
        overrides.setdefault("browser", {})["engine"] = engine
    if visible:
        overrides.setdefault("browser", {})["headless"] = False
    if timeout_ms is not None:
        overrides.setdefault("resolver", {})["timeout_ms"] = timeout_ms
    if verbose:
        overrides.setdefault("logging", {})["level"] = "DEBUG"

    try:
        settings = load_config(config_path=config, **overrides)
    except LabelLocatorError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(2)

    setup_logging(settings.logging.level, settings.logging.file, settings.logging.json_format)
    return settings


def _open_document(settings: Settings, url: Optional[str], html: Optional[Path]) -> tuple:
    """Return (browser, document) ready to query; the caller closes the browser."""
    if html is not None:
        document: IDocument = StaticDocument.from_file(html)
        browser: IBrowser = StaticBrowser()
        browser.launch()
        return browser, document
    if not url:
        console.print("[red]Error: give a URL or --html FILE[/red]")
        raise typer.Exit(2)

    browser = launch_browser(settings.browser)
    try:
        document = browser.new_page()
        document.goto(url)
    except LabelLocatorError:
        browser.close()
        raise
    return browser, document


@app.command()
def resolve(
    labels: List[str] = typer.Argument(..., help="Label texts to resolve"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Page to open"),
    html: Optional[Path] = typer.Option(None, "--html", help="Resolve against a saved HTML file instead"),
    engine: Optional[str] = typer.Option(None, "--engine", "-e", help="Engine: selenium, playwright, static"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", "-t", help="Visible-label wait in ms"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Resolve label texts to their input elements and print what matched.

    Examples:
        label-locator resolve "First Name" "Email" --url https://example.com/form
        label-locator resolve "First Name" --html form.html
    """
    settings = _load_settings(config, engine, visible, timeout_ms, verbose)
    resolver = LabelResolver(settings.resolver)

    try:
        browser, document = _open_document(settings, url, html)
    except LabelLocatorError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title="Resolved labels")
    table.add_column("Label", style="bold")
    table.add_column("Strategy")
    table.add_column("Element")

    failures = 0
    with browser:
        for label in labels:
            try:
                resolved = resolver.locate(document, label)
            except ResolutionError as e:
                failures += 1
                table.add_row(escape(label), "[red]failed[/red]", escape(e.details.get("reason", e.message)))
                continue
            handle = resolved.element.to_handle(resolved.selector)
            table.add_row(escape(label), resolved.strategy.value, escape(handle.describe()))

    console.print(table)
    if failures:
        raise typer.Exit(1)


@app.command()
def fill(
    fields: Path = typer.Option(..., "--fields", "-f", help="YAML file of label: value pairs"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Page to open"),
    html: Optional[Path] = typer.Option(None, "--html", help="Fill a saved HTML file instead (dry run)"),
    engine: Optional[str] = typer.Option(None, "--engine", "-e", help="Engine: selenium, playwright, static"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", "-t", help="Visible-label wait in ms"),
    stop_on_error: bool = typer.Option(False, "--stop-on-error", help="Stop at the first failing field"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Fill a form from a field-value table, locating each input by its label.

    Examples:
        label-locator fill --url https://example.com/form --fields fields.yaml
    """
    settings = _load_settings(config, engine, visible, timeout_ms, verbose)
    if stop_on_error:
        settings = settings.merge_with({"form": {"stop_on_error": True}})

    try:
        field_specs = load_fields(fields)
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(2)

    try:
        browser, document = _open_document(settings, url, html)
    except LabelLocatorError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    filler = FormFiller(LabelResolver(settings.resolver), settings.form)
    with browser:
        results = filler.fill(document, field_specs)

    table = Table(title="Filled fields")
    table.add_column("Label", style="bold")
    table.add_column("Value")
    table.add_column("Strategy")
    table.add_column("Result")
    for result in results:
        table.add_row(
            escape(result.label),
            escape(result.value),
            result.strategy.value if result.strategy else "-",
            "[green]ok[/green]" if result.success else f"[red]{escape(result.error or '')}[/red]",
        )
    console.print(table)

    if len(results) < len(field_specs) or not all(r.success for r in results):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
