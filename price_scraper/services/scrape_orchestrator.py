# price_scraper/services/scrape_orchestrator.py

"""Request-level scrape flow: cache probe, browser page, extraction."""

import logging
from typing import Any

from price_scraper.browser.page_query import PageProvider
from price_scraper.config.settings import Settings
from price_scraper.exceptions import AcquisitionFault, ValidationError
from price_scraper.extraction.price_extractor import PriceExtractor
from price_scraper.extraction.store_resolver import resolve_store
from price_scraper.models.scrape_result import ScrapeResult, utc_timestamp
from price_scraper.storage.result_cache import ResultCache, cache_key

logger = logging.getLogger("price_scraper.orchestrator")


class ScrapeOrchestrator:
    """Produces a scrape payload for a URL, reusing cached results.

    Concurrent requests for the same uncached URL are not merged: each
    one opens its own page and scrapes independently.
    """

    def __init__(
        self,
        cache: ResultCache,
        pages: PageProvider,
        extractor: PriceExtractor | None = None,
    ) -> None:
        self.settings = Settings()
        self.cache = cache
        self.pages = pages
        self.extractor = extractor or PriceExtractor()

    async def scrape(self, url: str | None) -> dict[str, Any]:
        """Return the payload for *url*, with a ``cached`` flag.

        Raises:
            ValidationError: *url* is missing or empty.
            AcquisitionFault: navigation or extraction failed. The page
                has already been released when this is raised.
        """
        if not url:
            raise ValidationError()

        key = cache_key(url)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s", url)
            return cached.as_dict(cached=True)

        result = await self._scrape_fresh(url)
        self.cache.set(key, result)
        return result.as_dict(cached=False)

    async def _scrape_fresh(self, url: str) -> ScrapeResult:
        """Open a page, let it settle, extract, and build the result."""
        logger.info("Scraping %s", url)
        try:
            async with self.pages.open_page() as page:
                await page.goto(
                    url,
                    wait_until=self.settings.WAIT_UNTIL,
                    timeout_ms=self.settings.NAVIGATION_TIMEOUT_MS,
                )
                await page.wait(self.settings.SETTLE_DELAY_MS)
                price = await self.extractor.extract(page)
                title = await page.title()
        except Exception as exc:
            logger.error(
                "Error scraping %s: %s", url, exc, exc_info=True,
            )
            raise AcquisitionFault(
                str(exc) or type(exc).__name__
            ) from exc

        return ScrapeResult(
            url=url,
            title=title,
            store=resolve_store(url),
            price=price,
            timestamp=utc_timestamp(),
        )
