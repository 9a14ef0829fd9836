# price_scraper/extraction/store_resolver.py

"""Display name for the store a product URL belongs to."""

from urllib.parse import urlparse


def resolve_store(url: str) -> str:
    """Return the URL's hostname without a leading ``www.``.

    Falls back to *url* itself when it cannot be parsed or carries no
    hostname, so the result is never empty for a non-empty input.
    """
    try:
        host = urlparse(url).hostname
    except ValueError:
        return url
    if not host:
        return url
    return host.removeprefix("www.")
