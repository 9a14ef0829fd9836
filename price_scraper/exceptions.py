# price_scraper/exceptions.py

"""Exceptions surfaced to callers of the scrape service.

A strategy failing to find a price is not an error and never raises;
these classes cover only what a caller must be told about.
"""


class ScraperError(Exception):
    """Base class for errors reported to the caller.

    ``error`` is the short label placed in the JSON error document and
    ``status_code`` the HTTP status it maps to.
    """

    status_code: int = 500
    error: str = "Scrape failed"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.error)
        self.message = message


class ValidationError(ScraperError):
    """Missing or malformed request input, e.g. no URL supplied."""

    status_code = 400
    error = "Missing ?url="


class AuthError(ScraperError):
    """Access key mismatch while a key is configured."""

    status_code = 401
    error = "Unauthorized - invalid key"


class AcquisitionFault(ScraperError):
    """Navigation timeout, browser unavailable or page crash.

    Raised only after the browser for the request has been released.
    """

    status_code = 500
    error = "Scrape failed"
