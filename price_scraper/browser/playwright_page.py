# price_scraper/browser/playwright_page.py

"""Headless Chromium pages backed by Playwright."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from playwright.async_api import Page, Playwright, async_playwright

from price_scraper.config.settings import Settings

logger = logging.getLogger("price_scraper.browser")

_TEXT_CONTENTS_JS = "els => els.map(e => e.textContent || '')"
_BODY_TEXT_JS = "() => document.body ? document.body.innerText : ''"
# Lookup and read run as one in-page call; null means no match.
_FIRST_TEXT_JS = (
    "s => { const el = document.querySelector(s);"
    " return el ? el.innerText : null; }"
)
_FIRST_ATTRIBUTE_JS = (
    "([s, name]) => { const el = document.querySelector(s);"
    " return el ? el.getAttribute(name) : null; }"
)


class PlaywrightPage:
    """:class:`PageQuery` adapter over a Playwright :class:`Page`."""

    def __init__(self, page: Page) -> None:
        self._page = page

    async def goto(
        self, url: str, wait_until: str, timeout_ms: int,
    ) -> None:
        await self._page.goto(
            url, wait_until=wait_until, timeout=timeout_ms,
        )

    async def wait(self, duration_ms: int) -> None:
        await self._page.wait_for_timeout(duration_ms)

    async def query_all(self, selector: str) -> list[str]:
        texts: list[str] = await self._page.eval_on_selector_all(
            selector, _TEXT_CONTENTS_JS,
        )
        return texts

    async def query_attribute(
        self, selector: str, name: str,
    ) -> str | None:
        value: str | None = await self._page.evaluate(
            _FIRST_ATTRIBUTE_JS, [selector, name],
        )
        return value

    async def query_text(self, selector: str) -> str | None:
        text: str | None = await self._page.evaluate(
            _FIRST_TEXT_JS, selector,
        )
        return text

    async def page_text(self) -> str:
        text: str = await self._page.evaluate(_BODY_TEXT_JS)
        return text

    async def title(self) -> str:
        return await self._page.title()


class BrowserLauncher:
    """Launches one Chromium instance per request.

    The Playwright driver is started once per process (:meth:`start`)
    and stopped at shutdown (:meth:`stop`); browsers opened through
    :meth:`open_page` never outlive the request that opened them.
    """

    def __init__(self) -> None:
        self.settings = Settings()
        self._playwright: Playwright | None = None

    async def start(self) -> None:
        """Start the Playwright driver if it is not running yet."""
        if self._playwright is None:
            self._playwright = await async_playwright().start()
            logger.info("Playwright driver started")

    async def stop(self) -> None:
        """Stop the Playwright driver."""
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
            logger.info("Playwright driver stopped")

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[PlaywrightPage]:
        """Launch a browser, yield a new page, close the browser on exit."""
        await self.start()
        if self._playwright is None:
            raise RuntimeError("Playwright driver is not running")
        browser = await self._playwright.chromium.launch(
            headless=self.settings.HEADLESS,
            args=self.settings.BROWSER_ARGS,
        )
        logger.debug("Browser launched")
        try:
            page = await browser.new_page()
            yield PlaywrightPage(page)
        finally:
            await browser.close()
            logger.debug("Browser closed")
