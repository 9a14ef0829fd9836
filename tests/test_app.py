# tests/test_app.py

"""Tests for the HTTP front end."""

import unittest
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from price_scraper.api.app import SECURITY_HEADERS, create_app
from price_scraper.browser.html_snapshot import HtmlSnapshotPage
from price_scraper.services.scrape_orchestrator import ScrapeOrchestrator
from price_scraper.storage.result_cache import ResultCache

URL = "https://www.example.co.uk/p/1"
PRODUCT_HTML = """
<html><head><title>Widget</title>
<meta property="product:price:amount" content="1,049.00">
</head><body>Widget</body></html>
"""


class _SnapshotProvider:
    """Serves static pages, optionally failing navigation."""

    def __init__(self, fail: Exception | None = None) -> None:
        self.fail = fail
        self.opened = 0

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[HtmlSnapshotPage]:
        self.opened += 1
        page = HtmlSnapshotPage(PRODUCT_HTML)
        if self.fail is not None:
            page.goto = AsyncMock(side_effect=self.fail)  # type: ignore[method-assign]
        yield page


def _client(
    provider: _SnapshotProvider | None = None, key: str = "",
) -> tuple[TestClient, _SnapshotProvider]:
    """Build a test client around a snapshot-backed orchestrator."""
    provider = provider or _SnapshotProvider()
    orch = ScrapeOrchestrator(ResultCache(ttl=900), provider)
    app = create_app(orchestrator=orch, scraper_key=key)
    return TestClient(app), provider


class TestScrapeEndpoint(unittest.TestCase):
    """GET /scrape behaviour."""

    def test_fresh_result(self) -> None:
        """A successful scrape returns the result with cached=false."""
        client, _ = _client()
        with client:
            resp = client.get("/scrape", params={"url": URL})
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["price"], "£1049.00")
        self.assertEqual(body["title"], "Widget")
        self.assertEqual(body["store"], "example.co.uk")
        self.assertEqual(body["url"], URL)
        self.assertFalse(body["cached"])

    def test_second_request_cached(self) -> None:
        """A repeat request within TTL is served from cache."""
        client, provider = _client()
        with client:
            first = client.get("/scrape", params={"url": URL}).json()
            second = client.get("/scrape", params={"url": URL}).json()
        self.assertEqual(provider.opened, 1)
        self.assertTrue(second["cached"])
        self.assertEqual(second["timestamp"], first["timestamp"])

    def test_missing_url(self) -> None:
        """No ?url= → 400 with an error document."""
        client, _ = _client()
        with client:
            resp = client.get("/scrape")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Missing ?url="})

    def test_empty_url(self) -> None:
        """An empty ?url= is treated as missing."""
        client, _ = _client()
        with client:
            resp = client.get("/scrape", params={"url": ""})
        self.assertEqual(resp.status_code, 400)

    def test_scrape_fault(self) -> None:
        """Navigation faults → 500 with the underlying message."""
        client, _ = _client(
            _SnapshotProvider(fail=TimeoutError("Timeout 35000ms exceeded."))
        )
        with client:
            resp = client.get("/scrape", params={"url": URL})
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(
            resp.json(),
            {
                "error": "Scrape failed",
                "message": "Timeout 35000ms exceeded.",
            },
        )

    def test_security_headers(self) -> None:
        """Hardening headers are set on every response."""
        client, _ = _client()
        with client:
            resp = client.get("/scrape")
        for name, value in SECURITY_HEADERS.items():
            with self.subTest(header=name):
                self.assertEqual(resp.headers[name], value)


class TestAccessKey(unittest.TestCase):
    """?key= gate on /scrape."""

    def test_wrong_key_rejected(self) -> None:
        """A mismatching key → 401."""
        client, provider = _client(key="s3cret")
        with client:
            resp = client.get("/scrape", params={"url": URL, "key": "nope"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(
            resp.json(), {"error": "Unauthorized - invalid key"}
        )
        self.assertEqual(provider.opened, 0)

    def test_missing_key_rejected(self) -> None:
        """No key at all → 401 when one is configured."""
        client, _ = _client(key="s3cret")
        with client:
            resp = client.get("/scrape", params={"url": URL})
        self.assertEqual(resp.status_code, 401)

    def test_key_checked_before_url(self) -> None:
        """An invalid key wins over a missing URL."""
        client, _ = _client(key="s3cret")
        with client:
            resp = client.get("/scrape")
        self.assertEqual(resp.status_code, 401)

    def test_correct_key_accepted(self) -> None:
        """The configured key lets the request through."""
        client, _ = _client(key="s3cret")
        with client:
            resp = client.get(
                "/scrape", params={"url": URL, "key": "s3cret"}
            )
        self.assertEqual(resp.status_code, 200)

    def test_no_key_configured_is_open(self) -> None:
        """Any key (or none) passes when no key is configured."""
        client, _ = _client(key="")
        with client:
            resp = client.get("/scrape", params={"url": URL, "key": "x"})
        self.assertEqual(resp.status_code, 200)

    def test_key_defaults_to_settings(self) -> None:
        """Without an explicit key, Settings.SCRAPER_KEY is used."""
        orch = ScrapeOrchestrator(ResultCache(ttl=900), _SnapshotProvider())
        with patch(
            "price_scraper.api.app.Settings.SCRAPER_KEY", "from-env"
        ):
            app = create_app(orchestrator=orch)
        with TestClient(app) as client:
            resp = client.get("/scrape", params={"url": URL})
        self.assertEqual(resp.status_code, 401)


class TestHealthEndpoint(unittest.TestCase):
    """GET /health."""

    def test_health_reports_cache_size(self) -> None:
        """Health is open and counts live cache entries."""
        client, _ = _client(key="s3cret")
        with client:
            before = client.get("/health").json()
            client.get("/scrape", params={"url": URL, "key": "s3cret"})
            after = client.get("/health").json()
        self.assertEqual(before, {"status": "ok", "cached_entries": 0})
        self.assertEqual(after["cached_entries"], 1)


class TestLifespan(unittest.TestCase):
    """Default wiring when no orchestrator is injected."""

    @patch("price_scraper.api.app.BrowserLauncher")
    def test_builds_and_tears_down_launcher(
        self, mock_launcher_cls: MagicMock,
    ) -> None:
        """Startup starts the browser driver and shutdown stops it."""
        launcher = mock_launcher_cls.return_value
        launcher.start = AsyncMock()
        launcher.stop = AsyncMock()

        app = create_app(scraper_key="")
        with TestClient(app) as client:
            self.assertIsInstance(
                app.state.orchestrator, ScrapeOrchestrator
            )
            resp = client.get("/health")
            self.assertEqual(resp.status_code, 200)

        launcher.start.assert_awaited_once()
        launcher.stop.assert_awaited_once()


if __name__ == "__main__":
    unittest.main()
