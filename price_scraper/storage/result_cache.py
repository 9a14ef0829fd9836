# price_scraper/storage/result_cache.py

"""In-memory scrape result cache with per-entry expiry."""

import logging
import time
from dataclasses import dataclass

from price_scraper.config.settings import Settings
from price_scraper.models.scrape_result import ScrapeResult

logger = logging.getLogger("price_scraper.cache")

CACHE_KEY_PREFIX = "price:"


def cache_key(url: str) -> str:
    """Build the cache key for *url*.

    The URL is used verbatim: a trailing slash or reordered query
    string gives a different key.
    """
    return f"{CACHE_KEY_PREFIX}{url}"


@dataclass
class CacheEntry:
    """A stored result and the time it was stored."""

    result: ScrapeResult
    stored_at: float


class ResultCache:
    """Maps cache keys to :class:`ScrapeResult` objects for a fixed TTL.

    Expired entries are evicted lazily when looked up. Reads never
    extend an entry's lifetime. A TTL of zero or less keeps entries
    until :meth:`clear`.

    Results are frozen, so handing the stored object to callers cannot
    corrupt the cache.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._ttl: float = (
            Settings.CACHE_TTL_SECONDS if ttl is None else ttl
        )

    @property
    def ttl(self) -> float:
        """Configured time-to-live in seconds."""
        return self._ttl

    def get(self, key: str) -> ScrapeResult | None:
        """Return the live result stored under *key*, or ``None``."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._is_expired(entry, time.time()):
            self._entries.pop(key, None)
            logger.debug("Evicted expired cache entry %s", key)
            return None
        return entry.result

    def set(self, key: str, value: ScrapeResult) -> None:
        """Store *value* under *key*, replacing any previous entry."""
        self._entries[key] = CacheEntry(
            result=value, stored_at=time.time(),
        )
        logger.info("Cached result for %s (ttl=%.0fs)", key, self._ttl)

    def clear(self) -> int:
        """Purge all cached entries.

        Returns the number of entries that were removed.
        """
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cache purged (%d entries removed)", count)
        return count

    def __len__(self) -> int:
        self._evict_expired(time.time())
        return len(self._entries)

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return self._ttl > 0 and now - entry.stored_at >= self._ttl

    def _evict_expired(self, now: float) -> None:
        """Remove every entry older than the TTL."""
        expired = [
            key
            for key, entry in self._entries.items()
            if self._is_expired(entry, now)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d expired cache entries", len(expired))
