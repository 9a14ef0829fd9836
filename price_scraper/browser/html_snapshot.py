# price_scraper/browser/html_snapshot.py

"""Static HTML stand-in for a rendered page.

Runs the extraction cascade over a saved page without a browser. No
JavaScript is executed, so only server-rendered prices are visible.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from bs4 import BeautifulSoup

logger = logging.getLogger("price_scraper.browser")


class HtmlSnapshotPage:
    """:class:`PageQuery` over an HTML document parsed with lxml."""

    def __init__(self, html: str) -> None:
        self.soup = BeautifulSoup(html, "lxml")

    async def goto(
        self, url: str, wait_until: str, timeout_ms: int,
    ) -> None:
        logger.debug("Snapshot page stands in for %s", url)

    async def wait(self, duration_ms: int) -> None:
        return None

    async def query_all(self, selector: str) -> list[str]:
        return [el.get_text() for el in self.soup.select(selector)]

    async def query_attribute(
        self, selector: str, name: str,
    ) -> str | None:
        el = self.soup.select_one(selector)
        if el is None:
            return None
        value = el.get(name)
        if value is None:
            return None
        # Multi-valued attributes (class, rel) come back as lists
        return " ".join(value) if isinstance(value, list) else str(value)

    async def query_text(self, selector: str) -> str | None:
        el = self.soup.select_one(selector)
        return el.get_text() if el is not None else None

    async def page_text(self) -> str:
        root = self.soup.body or self.soup
        return root.get_text()

    async def title(self) -> str:
        if self.soup.title is None:
            return ""
        return self.soup.title.get_text(strip=True)


class HtmlSnapshotProvider:
    """Hands out a fresh :class:`HtmlSnapshotPage` for the same HTML."""

    def __init__(self, html: str) -> None:
        self.html = html

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[HtmlSnapshotPage]:
        yield HtmlSnapshotPage(self.html)
