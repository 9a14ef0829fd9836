# price_scraper/cli/runner.py

"""Headless one-shot scrape runner, sharing the service's orchestrator."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from price_scraper.browser.html_snapshot import HtmlSnapshotProvider
from price_scraper.browser.page_query import PageProvider
from price_scraper.browser.playwright_page import BrowserLauncher
from price_scraper.exceptions import ScraperError
from price_scraper.services.scrape_orchestrator import ScrapeOrchestrator
from price_scraper.storage.result_cache import ResultCache

logger = logging.getLogger("price_scraper.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _print_table(payload: dict[str, Any]) -> None:
    """Render a Rich table of one scrape result to stdout."""
    table = Table(
        title="Scrape Result",
        show_header=False,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Field", style="bold")
    table.add_column("Value", overflow="fold")

    table.add_row(
        "Store", f"[magenta]{escape(payload['store'])}[/magenta]",
    )
    table.add_row(
        "Title", escape(payload["title"]) if payload["title"] else "—",
    )
    table.add_row(
        "Price",
        f"[green]{escape(payload['price'])}[/green]"
        if payload["price"]
        else "[yellow]N/A[/yellow]",
    )
    table.add_row("URL", f"[dim]{escape(payload['url'])}[/dim]")
    table.add_row("Scraped at", payload["timestamp"])

    Console().print(table)


async def cli_scrape(
    url: str | None,
    html_path: str | None,
    output_format: str,
) -> int:
    """Scrape one page and print the result.

    With *html_path* the saved page is parsed statically and no browser
    is launched. Returns 0 when a price was found, 1 otherwise.
    """
    launcher: BrowserLauncher | None = None
    pages: PageProvider
    if html_path is not None:
        path = Path(html_path)
        try:
            html = path.read_text(encoding="utf-8")
        except OSError as exc:
            _err.print(
                f"[red]Cannot read {escape(str(path))}: "
                f"{escape(str(exc))}[/red]"
            )
            return 1
        pages = HtmlSnapshotProvider(html)
        target = url or path.resolve().as_uri()
    else:
        launcher = BrowserLauncher()
        pages = launcher
        target = url or ""

    orchestrator = ScrapeOrchestrator(ResultCache(), pages)
    _err.print(f"[bold]Scraping:[/bold] {escape(target)}")

    try:
        payload = await orchestrator.scrape(target)
    except ScraperError as exc:
        logger.error("CLI scrape failed: %s", exc)
        _err.print(f"[red]{exc.error}: {escape(str(exc))}[/red]")
        return 1
    finally:
        if launcher is not None:
            await launcher.stop()

    if payload["price"]:
        _err.print(f"[green]✓ {escape(payload['price'])}[/green]")
    else:
        _err.print("[yellow]No price found.[/yellow]")

    if output_format == "table":
        _print_table(payload)
    else:
        json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")

    return 0 if payload["price"] else 1
