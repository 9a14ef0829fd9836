# price_scraper/models/scrape_result.py

"""Scrape result model shared by the cache, orchestrator and API."""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any


def utc_timestamp() -> str:
    """Return the current instant as an ISO-8601 string (UTC, ms)."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ScrapeResult:
    """The outcome of one fresh scrape of a product page.

    ``cached`` is not a field. It describes how a result was served
    and is added per response by :meth:`as_dict`.
    """

    url: str
    title: str
    store: str
    price: str | None
    timestamp: str

    def as_dict(self, cached: bool = False) -> dict[str, Any]:
        """Return a new payload dict with the ``cached`` flag appended."""
        payload = asdict(self)
        payload["cached"] = cached
        return payload
