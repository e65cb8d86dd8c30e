"""Junk-value detection for scraped fields.

Scraped records use many placeholders for "no value": ``N/A``, ``n / a``,
``N.A.``, ``--``, ``null``, ``TBD`` and so on, often padded with whitespace
or zero-width characters. Everything here is total: any input is accepted
and nothing raises.
"""

import re
from typing import Any, Optional

_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")

# whitespace . / \ _ - en dash, fraction slash
_SEPARATORS = re.compile(r"[\s./\\_\-\u2013\u2044]")

JUNK_TOKENS = frozenset({"", "na", "none", "null", "undefined", "tbd"})


def is_junk(value: Any) -> bool:
    """Return True if ``value`` is absent or a placeholder.

    Args:
        value: Any scalar (non-strings are compared by their ``str()`` form)

    Returns:
        True for None, blank strings and placeholders like "N/A" or "--"

    Example:
        >>> is_junk("n / a"), is_junk("NAB Inc")
        (True, False)
    """
    if value is None:
        return True
    try:
        text = str(value)
    except Exception:
        return True
    text = _ZERO_WIDTH.sub("", text).strip().lower()
    return _SEPARATORS.sub("", text) in JUNK_TOKENS


def first_meaningful(*values: Any) -> Any:
    """Return the first value that is not None and, if a string, not junk."""
    for value in values:
        if value is None:
            continue
        if isinstance(value, str) and is_junk(value):
            continue
        return value
    return None


def clean_text(value: Any) -> Optional[str]:
    """Return the trimmed string form of ``value``, or None if it is junk."""
    if is_junk(value):
        return None
    return str(value).strip()
