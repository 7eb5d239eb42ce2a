"""Request string helpers for OGC service URLs."""

from typing import Any, Mapping
from urllib.parse import quote

from mapindex.core.config import REQUEST_STRING_SAFE_CHARS


def object_to_request_string(params: Mapping[str, Any]) -> str:
    """Encode a parameter mapping as a query string.

    Pairs keep the mapping's order. Slashes, colons and commas are left
    literal so values like ``image/png`` or ``ns:layer`` stay readable.
    None values become empty strings.

    Args:
        params: Request parameters

    Returns:
        Query string without leading '?'
    """
    pairs = []
    for key, value in params.items():
        encoded_key = quote(str(key), safe=REQUEST_STRING_SAFE_CHARS)
        encoded_value = quote("" if value is None else str(value), safe=REQUEST_STRING_SAFE_CHARS)
        pairs.append(f"{encoded_key}={encoded_value}")
    return "&".join(pairs)


def append_query(url: str, query: str) -> str:
    """Append a query string to a URL, respecting an existing query."""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"
