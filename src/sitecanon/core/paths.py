"""URL path normalization and validity checks.

Canonical paths are absolute, carry no query or fragment, and have no
trailing slash except for the root path itself.
"""

import re
from urllib.parse import urlsplit

from sitecanon.core.types import Origin, URLPath

# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*$")

# Schemes that cannot be parsed without a host
_NETWORK_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


def normalize_path(path: str) -> URLPath:
    """Normalize a raw path into its canonical form.

    Drops the query string and fragment, ensures a leading slash and strips
    trailing slashes unless the path is the root. Interior double slashes
    are left as they are.

    Args:
        path: Raw path (e.g., "documents/intro/?tab=2#usage")

    Returns:
        Canonical path (e.g., "/documents/intro")
    """
    path = path.split("?", 1)[0]
    path = path.split("#", 1)[0]
    if not path.startswith("/"):
        path = f"/{path}"
    if path != "/" and path.endswith("/"):
        path = path.rstrip("/") or "/"
    return URLPath(path)


def is_valid_url(url: str) -> bool:
    """Check that a string parses as an absolute URL.

    No scheme whitelist is applied, but network schemes must carry a host.

    Args:
        url: Candidate URL

    Returns:
        True if the URL is well-formed
    """
    if not url or any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        return False

    try:
        parts = urlsplit(url)
        # Accessing port validates it (raises ValueError when out of range)
        _ = parts.port
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return False

    if parts.scheme.lower() in _NETWORK_SCHEMES:
        return bool(parts.hostname)

    return bool(parts.netloc or parts.path)


def is_origin(value: str) -> bool:
    """Check that a string is a bare origin (scheme and host, nothing else)."""
    if not is_valid_url(value):
        return False
    parts = urlsplit(value)
    return (
        bool(parts.netloc)
        and not parts.path
        and not parts.query
        and not parts.fragment
        and not value.endswith(("?", "#"))
    )


def origin_of(url: str) -> Origin | None:
    """Extract the origin of an absolute URL.

    Returns:
        Origin (e.g., "https://example.test") or None for URLs without a host
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return Origin(f"{parts.scheme}://{parts.netloc}")


def path_of(url: str) -> URLPath:
    """Extract the raw path of an absolute URL, defaulting to the root."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return URLPath("/")
    return URLPath(path or "/")
