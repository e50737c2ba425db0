import json
import math
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

# Characters encodeURIComponent leaves alone on top of Python's always-safe set.
_SAFE = "!*'()"


def _quote(value: str) -> str:
    return quote(value, safe=_SAFE)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> str:
    """
    Builds a query string (without the leading '?') from a parameter mapping.

    Lists and tuples use bracket notation (key[]=a&key[]=b), dicts are sent
    as JSON text and None values are skipped entirely.
    """
    if not params:
        return ""

    parts: list[str] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            array_key = _quote(f"{key}[]")
            parts.extend(f"{array_key}={_quote(_to_text(item))}" for item in value)
        elif isinstance(value, Mapping):
            parts.append(f"{_quote(key)}={_quote(json.dumps(value, separators=(',', ':')))}")
        else:
            parts.append(f"{_quote(key)}={_quote(_to_text(value))}")
    return "&".join(parts)


def normalize_url(url: str) -> str:
    """Strips one trailing slash and defaults the scheme to https."""
    if not url:
        return ""
    normalized = url[:-1] if url.endswith("/") else url
    if not normalized.startswith(("http://", "https://")):
        normalized = f"https://{normalized}"
    return normalized


def _parse_int_header(headers: httpx.Headers, name: str) -> int | float:
    raw = headers.get(name)
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        return math.nan


def parse_pagination_headers(headers: httpx.Headers) -> tuple[int | float, int | float]:
    """Returns (total, total_pages) from the X-WP-Total / X-WP-TotalPages headers."""
    return _parse_int_header(headers, "x-wp-total"), _parse_int_header(headers, "x-wp-totalpages")
