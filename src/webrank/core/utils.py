from urllib.parse import parse_qsl, urldefrag, urlencode, urlsplit, urlunsplit
from typing import Optional

TRACKING_KEYS = {
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "gclid",
    "fbclid",
}


def url_parts(url: str | None) -> Optional[tuple[str, str]]:
    """
    Return the lower-cased (hostname, path) of an absolute URL.

    Returns None for anything that is not an absolute URL with a host,
    e.g. "not a url" or "/relative/path".

    Raises:
        ValueError: for URLs urlsplit itself rejects (bad IPv6 literals)
    """
    if not url:
        return None
    parts = urlsplit(url.strip())
    if not parts.scheme or not parts.hostname:
        return None
    return parts.hostname.lower(), parts.path.lower()


def normalize_url(url: str | None) -> Optional[str]:
    """Canonical form of an http(s) URL, used as a de-duplication key."""
    if not url:
        return None
    try:
        href, _ = urldefrag(url.strip())
        if not href.lower().startswith(("http://", "https://")):
            return None
        parts = urlsplit(href)
        port = f":{parts.port}" if parts.port else ""
    except ValueError:
        return None
    # lower scheme/host & strip common tracking params
    host = (parts.hostname or "").lower()
    query = urlencode(
        [
            (k, v)
            for k, v in parse_qsl(parts.query, keep_blank_values=True)
            if k not in TRACKING_KEYS
        ]
    )
    path = parts.path.rstrip("/") or "/"
    return urlunsplit((parts.scheme.lower(), host + port, path, query, ""))
