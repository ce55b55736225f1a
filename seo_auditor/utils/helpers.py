"""General-purpose helper utilities for the auditor."""

import math
from urllib.parse import urlparse


def ensure_scheme(url: str) -> str:
    """Prefix *url* with ``https://`` when it has no http(s) scheme.

    Examples:
        >>> ensure_scheme("example.com")
        'https://example.com'
        >>> ensure_scheme("http://example.com")
        'http://example.com'
    """
    url = url.strip()
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def extract_hostname(url: str) -> str:
    """Extract the lower-cased hostname from a URL.

    Args:
        url: Full URL string.  Scheme-less input is treated as https.

    Returns:
        Hostname without protocol, port or path.
    """
    parsed = urlparse(url if "://" in url else f"https://{url}")
    return (parsed.hostname or "").lower()


def origin(url: str) -> str:
    """Return ``scheme://hostname`` for *url* (port dropped)."""
    parsed = urlparse(url if "://" in url else f"https://{url}")
    return f"{parsed.scheme}://{(parsed.hostname or '').lower()}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def percentage(part: int, whole: int) -> int:
    """Integer percentage of *part* in *whole*; 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    return (200 * part + whole) // (2 * whole)
