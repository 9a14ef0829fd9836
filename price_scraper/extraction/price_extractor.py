# price_scraper/extraction/price_extractor.py

"""Ordered cascade of price extraction strategies."""

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from price_scraper.browser.page_query import PageQuery
from price_scraper.config.settings import Settings
from price_scraper.extraction.price_normalizer import normalize_gbp

logger = logging.getLogger("price_scraper.extraction")

PriceStrategy = Callable[[PageQuery], Awaitable[str | None]]


def _json_ld_price(text: str | None) -> Any:
    """Return the raw offer price from one JSON-LD payload, if any.

    Looks at ``offers.price`` then ``offers.priceSpecification.price``.
    An array payload is judged by its first element only.
    """
    try:
        data = json.loads(text or "")
    except json.JSONDecodeError:
        logger.debug("Skipping malformed JSON-LD payload")
        return None

    node = data[0] if isinstance(data, list) and data else data
    if not isinstance(node, dict):
        return None
    offers = node.get("offers")
    if not isinstance(offers, dict):
        return None

    price = offers.get("price")
    if not price:
        spec = offers.get("priceSpecification")
        if isinstance(spec, dict):
            price = spec.get("price")
    return price or None


class PriceExtractor:
    """Find a pound price on a rendered page.

    Strategies run in a fixed order and the first one producing a
    canonical price wins; later strategies are not consulted:

    1. JSON-LD ``offers`` blocks
    2. price meta tags
    3. known storefront price selectors
    4. the whole page's visible text

    Missing elements, missing attributes and malformed JSON simply
    yield no price for that attempt. Errors raised by the page itself
    propagate to the caller.
    """

    def __init__(
        self, selectors: dict[str, Any] | None = None,
    ) -> None:
        self.settings = Settings()
        self.selectors: dict[str, Any] = (
            selectors if selectors is not None
            else self._load_selectors()
        )
        self.strategies: list[tuple[str, PriceStrategy]] = [
            ("json_ld", self._from_json_ld),
            ("meta", self._from_meta_tags),
            ("selectors", self._from_price_selectors),
            ("page_text", self._from_page_text),
        ]

    def _load_selectors(self) -> dict[str, Any]:
        """Load the price selectors from selectors.json."""
        with open(self.settings.SELECTORS_PATH, encoding="utf-8") as f:
            selectors: dict[str, Any] = json.load(f)
        return selectors

    def _with_symbol(self, raw: Any) -> str | None:
        """Prefix a bare amount with the currency symbol and normalise."""
        return normalize_gbp(f"{self.settings.CURRENCY_SYMBOL}{raw}")

    async def extract(self, page: PageQuery) -> str | None:
        """Run the cascade and return the first canonical price found."""
        for name, strategy in self.strategies:
            price = await strategy(page)
            if price is not None:
                logger.info("Price %s found via %s", price, name)
                return price
            logger.debug("No price from %s strategy", name)
        logger.info("No price found on page")
        return None

    async def _from_json_ld(self, page: PageQuery) -> str | None:
        for text in await page.query_all(self.selectors["json_ld"]):
            raw = _json_ld_price(text)
            if raw is None:
                continue
            price = self._with_symbol(raw)
            if price:
                return price
        return None

    async def _from_meta_tags(self, page: PageQuery) -> str | None:
        for selector in self.selectors["meta"]:
            content = await page.query_attribute(selector, "content")
            if not content:
                continue
            price = self._with_symbol(content)
            if price:
                return price
        return None

    async def _from_price_selectors(
        self, page: PageQuery,
    ) -> str | None:
        # Element text already carries the symbol
        for selector in self.selectors["price"]:
            price = normalize_gbp(await page.query_text(selector))
            if price:
                logger.debug("Matched price selector %s", selector)
                return price
        return None

    async def _from_page_text(self, page: PageQuery) -> str | None:
        return normalize_gbp(await page.page_text())
