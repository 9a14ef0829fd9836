# price_scraper/extraction/price_normalizer.py

"""Turn arbitrary price text into a canonical pound-sterling string."""

import re

# £, optional space, an integer part that is either thousands-grouped
# ("1,234" / "1.234.567") or a plain run of digits ("1234"), then an
# optional two-digit fraction after "." or ",".
_GBP_PATTERN = re.compile(
    r"£\s?"
    r"(?:[0-9]{1,3}(?:[.,][0-9]{3})+|[0-9]+)"
    r"(?:[.,][0-9]{2})?"
)
_STRIP_PATTERN = re.compile(r"[\s,]")


def normalize_gbp(raw: object) -> str | None:
    """Return the first pound price in *raw* as e.g. ``'£1234.56'``.

    Whitespace and commas are removed from the matched text. Returns
    ``None`` for empty input or when no ``£`` amount is present. The
    value itself is not sanity-checked.

    Commas are always treated as thousands separators, so a
    European-style amount keeps its dot and loses its comma
    (``"£1.234,56"`` gives ``"£1.23456"``). Such output is not a
    fixed point of this function.

    >>> normalize_gbp("Now only £1,234.56 inc. VAT")
    '£1234.56'
    >>> normalize_gbp("no price here") is None
    True
    """
    if raw is None or raw == "":
        return None
    match = _GBP_PATTERN.search(str(raw))
    if not match:
        return None
    return _STRIP_PATTERN.sub("", match.group(0))
