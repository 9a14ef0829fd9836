# price_scraper/browser/page_query.py

"""Query interface the extraction cascade runs against.

Lookups report a missing element or attribute as ``None`` (or an empty
list) rather than raising. Anything these methods do raise is a fault
in the page itself, e.g. a crashed tab or a navigation timeout.
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol


class PageQuery(Protocol):
    """A rendered page that can be navigated and queried."""

    async def goto(
        self, url: str, wait_until: str, timeout_ms: int,
    ) -> None:
        """Navigate to *url*, failing after *timeout_ms*."""
        ...

    async def wait(self, duration_ms: int) -> None:
        """Pause for a fixed duration."""
        ...

    async def query_all(self, selector: str) -> list[str]:
        """Return the text content of every element matching *selector*."""
        ...

    async def query_attribute(
        self, selector: str, name: str,
    ) -> str | None:
        """Return attribute *name* of the first match, if any."""
        ...

    async def query_text(self, selector: str) -> str | None:
        """Return the visible text of the first match, if any."""
        ...

    async def page_text(self) -> str:
        """Return the visible text of the whole page."""
        ...

    async def title(self) -> str:
        """Return the document title."""
        ...


class PageProvider(Protocol):
    """Hands out one page per request and releases it afterwards."""

    def open_page(self) -> AbstractAsyncContextManager[PageQuery]:
        """Acquire a fresh page, released when the context exits."""
        ...
