"""URL and email normalization.

Raw link fields arrive as bare hosts ("acme.com"), protocol-relative paths
("//www.linkedin.com/in/x"), full URLs, or placeholders. These helpers turn
them into absolute http(s) URLs, derive display domains and the canonical
key used to tell whether two links are the same.
"""

import re
from typing import Any, Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit

from .values import is_junk

_HTTP_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
_HOST_FORBIDDEN = re.compile(r"[\s<>\"'`{}|\\^%,;!*()]")
_LENIENT_PREFIX = re.compile(r"^(?:https?://)?(?:www\.)?", re.IGNORECASE)
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MAILTO_PREFIX = "mailto:"


def _split(url: str) -> Optional[SplitResult]:
    """Strictly parse an absolute http(s) URL; None if it is not one."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return None

    if parts.scheme.lower() not in ("http", "https") or not host:
        return None
    if _HOST_FORBIDDEN.search(host) or host.startswith(".") or ".." in host:
        return None
    return parts


def _with_scheme(text: str) -> str:
    if _HTTP_SCHEME.match(text):
        return text
    # protocol-relative values like "//www.linkedin.com/in/x"
    return "https://" + text.lstrip("/")


def to_absolute_url(raw: Any) -> Optional[str]:
    """Turn a raw link value into an absolute http(s) URL.

    Missing schemes default to ``https://``. Scheme and host are lower-cased;
    path, query and fragment are kept as given (spaces are percent-encoded).

    Args:
        raw: Raw field value

    Returns:
        Absolute URL string, or None for junk, non-strings or unparseable values

    Example:
        >>> to_absolute_url("linkedin.com/company/acme")
        'https://linkedin.com/company/acme'
    """
    if not isinstance(raw, str) or is_junk(raw):
        return None

    parts = _split(_with_scheme(raw.strip()))
    if parts is None:
        return None

    userinfo, _, hostport = parts.netloc.rpartition("@")
    netloc = f"{userinfo}@{hostport.lower()}" if userinfo else hostport.lower()

    return urlunsplit((
        parts.scheme.lower(),
        netloc,
        parts.path.replace(" ", "%20"),
        parts.query.replace(" ", "%20"),
        parts.fragment.replace(" ", "%20"),
    ))


def parse_host(url: Optional[str]) -> Optional[str]:
    """Return the lower-cased host of an absolute URL, or None if unparseable."""
    if not isinstance(url, str):
        return None
    parts = _split(url.strip())
    return parts.hostname if parts else None


def parse_path(url: Optional[str]) -> Optional[str]:
    """Return the path of an absolute URL, or None if unparseable."""
    if not isinstance(url, str):
        return None
    parts = _split(url.strip())
    return parts.path if parts else None


def display_domain(url: Any) -> Optional[str]:
    """Return a short host for display ("acme.com" for "https://www.acme.com/x").

    Email addresses and ``mailto:`` links yield the mail domain. Values that do
    not parse as URLs fall back to stripping the scheme and ``www.`` and cutting
    at the first ``/``, since some raw values are host-only strings with
    trailing path fragments.

    Returns:
        Lower-cased domain, or None if nothing usable is left
    """
    if not isinstance(url, str) or is_junk(url):
        return None

    text = url.strip()
    email = clean_email(text) if "@" in text and not _HTTP_SCHEME.match(text) else None
    if email:
        return email.rpartition("@")[2].lower()

    host = parse_host(_with_scheme(text))
    if host:
        return host[4:] if host.startswith("www.") else host

    fallback = _LENIENT_PREFIX.sub("", text).split("/")[0].strip().lower()
    return fallback or None


def canonical_key(url: Any) -> Optional[str]:
    """Identity key used to detect the same link under two slots.

    Lower-cased host plus path without trailing slashes; scheme, query string
    and fragment are ignored. Never used as a displayed value.

    Example:
        >>> canonical_key("https://Acme.com/careers/?ref=x#top")
        'acme.com/careers'
    """
    if not isinstance(url, str) or is_junk(url):
        return None
    parts = _split(_with_scheme(url.strip()))
    if parts is None:
        return None
    return f"{parts.hostname}{parts.path.rstrip('/')}"


def clean_email(raw: Any) -> Optional[str]:
    """Extract a plausible email address from a raw value.

    Strips a leading ``mailto:`` and any ``?subject=...`` suffix, then requires
    a ``local@domain.tld`` shape without whitespace. Web URLs are never emails,
    even with an ``@`` in the path (``https://medium.com/@jane``).

    Example:
        >>> clean_email("mailto:jane@acme.com")
        'jane@acme.com'
    """
    if not isinstance(raw, str) or is_junk(raw):
        return None

    text = raw.strip()
    if text.lower().startswith(MAILTO_PREFIX):
        text = text[len(MAILTO_PREFIX):].split("?", 1)[0].strip()

    if _HTTP_SCHEME.match(text) or not _EMAIL.match(text):
        return None
    return text


def mailto_href(email: Optional[str]) -> Optional[str]:
    """Build a ``mailto:`` href for an already-cleaned email."""
    if not email:
        return None
    return f"{MAILTO_PREFIX}{email}"


def strip_mailto(href: Optional[str]) -> Optional[str]:
    """Inverse of mailto_href()."""
    if not href:
        return None
    if href.lower().startswith(MAILTO_PREFIX):
        return href[len(MAILTO_PREFIX):]
    return href
