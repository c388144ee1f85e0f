"""
URL syntax checks used while importing bookmarks.

Only the shape of a URL is examined here; nothing is resolved or fetched.
"""

import ipaddress
import re
from typing import Optional
from urllib.parse import urlsplit

# Schemes that are always unsafe inside an imported bookmark
EXCLUDED_SCHEMES = ("javascript:", "data:")

# Schemes whose URLs are meaningless without a host
HOST_REQUIRED_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.\-]*$", re.IGNORECASE)
HOSTNAME_PATTERN = re.compile(r"^[^\s/?#@:<>\\^|%\[\]\"'`{}]+$")
FORBIDDEN_CHARACTERS = re.compile(r"[\x00-\x20\x7f]")


def has_excluded_scheme(url: Optional[str]) -> bool:
    """
    Check whether a bookmark URL uses a scheme that is dropped on import.

    Args:
        url: URL taken from an export

    Returns:
        True for javascript: and data: URLs
    """
    if not url:
        return False
    return url.strip().lower().startswith(EXCLUDED_SCHEMES)


def _is_valid_host(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass
    return bool(HOSTNAME_PATTERN.match(hostname)) and not hostname.startswith(".")


def is_absolute_url(url: Optional[str]) -> bool:
    """
    Strictly check that a value parses as an absolute URL.

    An absolute URL carries a well-formed scheme and something after it.
    Web schemes must also carry a well-formed host and, when present, a
    numeric port in range. Whitespace and control characters are rejected
    anywhere in the value.

    Args:
        url: Candidate URL

    Returns:
        True if the URL is absolute and well-formed
    """
    if not url or not isinstance(url, str):
        return False

    if FORBIDDEN_CHARACTERS.search(url):
        return False

    scheme, separator, remainder = url.partition(":")
    if not separator or not remainder or not SCHEME_PATTERN.match(scheme):
        return False

    try:
        parsed = urlsplit(url)
        # Accessing port validates it
        parsed.port
    except ValueError:
        return False

    if parsed.scheme.lower() in HOST_REQUIRED_SCHEMES:
        if not remainder.startswith("//"):
            return False
        hostname = parsed.hostname
        if not hostname or not _is_valid_host(hostname):
            return False

    return True


__all__ = ["has_excluded_scheme", "is_absolute_url", "EXCLUDED_SCHEMES"]
