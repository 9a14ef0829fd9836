# tests/test_scrape_result.py

"""Tests for the ScrapeResult data model."""

import dataclasses
import re
import unittest

from price_scraper.models.scrape_result import ScrapeResult, utc_timestamp


def _result() -> ScrapeResult:
    return ScrapeResult(
        url="https://www.example.co.uk/p/1",
        title="Widget",
        store="example.co.uk",
        price="£9.99",
        timestamp="2026-10-19T12:00:00.000Z",
    )


class TestScrapeResult(unittest.TestCase):
    """ScrapeResult creation and payload rendering."""

    def test_as_dict_fields(self) -> None:
        """Payload carries every field plus the cached flag."""
        payload = _result().as_dict()
        self.assertEqual(
            set(payload),
            {"url", "title", "store", "price", "timestamp", "cached"},
        )
        self.assertFalse(payload["cached"])

    def test_as_dict_cached_flag(self) -> None:
        """cached=True is reflected in the payload."""
        self.assertTrue(_result().as_dict(cached=True)["cached"])

    def test_payload_is_a_copy(self) -> None:
        """Mutating a payload leaves the result untouched."""
        result = _result()
        payload = result.as_dict()
        payload["price"] = "£0.01"
        self.assertEqual(result.price, "£9.99")
        self.assertEqual(result.as_dict()["price"], "£9.99")

    def test_frozen(self) -> None:
        """Fields cannot be reassigned after creation."""
        result = _result()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            result.price = "£1.00"  # type: ignore[misc]

    def test_price_may_be_none(self) -> None:
        """A result without a price is still valid."""
        result = dataclasses.replace(_result(), price=None)
        self.assertIsNone(result.as_dict()["price"])


class TestUtcTimestamp(unittest.TestCase):
    """utc_timestamp formatting."""

    def test_iso_8601_utc(self) -> None:
        """Timestamps look like 2026-10-19T12:00:00.000Z."""
        self.assertRegex(
            utc_timestamp(),
            re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$"),
        )


if __name__ == "__main__":
    unittest.main()
