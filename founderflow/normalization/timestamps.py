"""Timestamp normalization for heterogeneous date fields.

Publication dates arrive as datetimes, Firestore-style timestamp objects or
dicts (``{"seconds": ...}`` / ``{"_seconds": ...}``), epoch seconds or
milliseconds (as numbers or numeric strings), ISO strings and free-form
dates. Everything here is total: unparseable input yields None (or "N/A" /
0 for the display and sort helpers), never an exception.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from numbers import Real
from typing import Any, Optional

from founderflow.utils.timestamps import (
    days_between,
    ensure_utc,
    format_short_date,
    millis_to_timestamp,
    parse_datetime,
    timestamp_to_millis,
    unix_to_timestamp,
    utc_now,
)

from . import aliases
from .values import is_junk

NOT_AVAILABLE = "N/A"
DISPLAY_SEPARATOR = " • "

MILLIS_THRESHOLD = 1e12
SECONDS_THRESHOLD = 1e9

_DATE_ACCESSORS = ("to_datetime", "to_pydatetime", "toDate", "to_date")
_MILLIS_ACCESSORS = ("to_millis", "toMillis")
_SECONDS_KEYS = ("seconds", "_seconds")


def _from_number(value: float) -> Optional[datetime]:
    if not math.isfinite(value):
        return None
    if abs(value) > MILLIS_THRESHOLD:
        return millis_to_timestamp(value)
    if abs(value) > SECONDS_THRESHOLD:
        return unix_to_timestamp(value)
    return millis_to_timestamp(value)


def _call_accessor(raw: Any, name: str) -> Any:
    """Call a zero-argument accessor on a foreign timestamp object.

    Any exception raised by the accessor counts as no value.
    """
    try:
        accessor = getattr(raw, name, None)
        return accessor() if callable(accessor) else None
    except Exception:
        return None


def _from_accessor(raw: Any) -> Optional[datetime]:
    for name in _DATE_ACCESSORS:
        value = _call_accessor(raw, name)
        if isinstance(value, date):
            return ensure_utc(value)
    for name in _MILLIS_ACCESSORS:
        value = _call_accessor(raw, name)
        if isinstance(value, Real) and not isinstance(value, bool):
            return millis_to_timestamp(float(value))
    return None


def _seconds_field(raw: Any) -> Any:
    for key in _SECONDS_KEYS:
        if isinstance(raw, Mapping):
            value = raw.get(key)
        else:
            value = getattr(raw, key, None)
        if value:
            return value
    return None


def _from_string(raw: str) -> Optional[datetime]:
    text = raw.strip()
    if not text or is_junk(text):
        return None

    try:
        number = float(text)
    except ValueError:
        number = None
    if number is not None:
        return _from_number(number)

    # Our own display format: "11/14/2023 • 2 days ago"
    if DISPLAY_SEPARATOR.strip() in text:
        text = text.split(DISPLAY_SEPARATOR.strip(), 1)[0].strip()

    return parse_datetime(text)


def _to_instant(raw: Any) -> Optional[datetime]:
    if not raw or isinstance(raw, bool):
        return None

    if isinstance(raw, date):
        return ensure_utc(raw)

    instant = _from_accessor(raw)
    if instant is not None:
        return instant

    seconds = _seconds_field(raw)
    if seconds is not None and not isinstance(seconds, bool):
        try:
            return unix_to_timestamp(float(seconds))
        except (TypeError, ValueError):
            return None

    if isinstance(raw, Real):
        return _from_number(float(raw))

    if isinstance(raw, str):
        return _from_string(raw)

    return None


def to_instant(raw: Any) -> Optional[datetime]:
    """Convert any supported timestamp encoding to an aware UTC datetime.

    Rules, in order:
    1. datetime/date values, or objects with a zero-argument calendar-date
       accessor (``to_datetime``, ``toDate``, ...) or epoch-millis accessor
       (``to_millis``, ``toMillis``)
    2. mappings/objects with a numeric ``seconds`` or ``_seconds`` field
    3. numbers: > 1e12 is milliseconds, > 1e9 is seconds, else milliseconds
    4. numeric strings, handled as numbers
    5. other strings: ISO 8601, then a general date parse

    Args:
        raw: Raw timestamp value of any shape

    Returns:
        Aware UTC datetime, or None if nothing matched
    """
    try:
        return _to_instant(raw)
    except Exception:
        return None


def relative_phrase(days: int) -> str:
    """Day-granularity relative phrase for a non-negative day count."""
    if days <= 0:
        return "today"
    if days == 1:
        return "1 day ago"
    if days < 30:
        return f"{days} days ago"
    if days < 365:
        return f"{days // 30} mo ago"
    return f"{days // 365} yr ago"


NO_DATE = "—"


def short_relative(raw: Any, now: Optional[datetime] = None) -> str:
    """Compact relative age for list rows.

    Returns "—" for unparseable input, "soon" for future instants, otherwise
    "today", "1d", "<n>d", "<n>mo" or "<n>yr" over whole UTC calendar days.

    Example:
        >>> short_relative("2024-01-10", now=datetime(2024, 1, 15))
        '5d'
    """
    instant = to_instant(raw)
    if instant is None:
        return NO_DATE

    now = ensure_utc(now or utc_now())
    if instant > now:
        return "soon"

    days = days_between(instant, now)
    if days <= 0:
        return "today"
    if days < 30:
        return f"{days}d"
    if days < 365:
        return f"{days // 30}mo"
    return f"{days // 365}yr"


def display_string(raw: Any, now: Optional[datetime] = None) -> str:
    """Render ``"<M/D/YYYY> • <relative>"`` for a raw timestamp.

    Days are whole UTC calendar days between the instant and ``now``.
    Future instants render the absolute date alone.

    Args:
        raw: Raw timestamp value
        now: Reference time (defaults to the current UTC time)

    Returns:
        Display string, or "N/A" if the timestamp could not be parsed
    """
    instant = to_instant(raw)
    if instant is None:
        return NOT_AVAILABLE

    absolute = format_short_date(instant)
    days = days_between(instant, now or utc_now())
    if days < 0:
        return absolute
    return f"{absolute}{DISPLAY_SEPARATOR}{relative_phrase(days)}"


def first_instant(record: Any, field: str) -> Optional[datetime]:
    """First parseable instant among a field's aliases, skipping junk and unparseable values."""
    for value in aliases.lookup_all(record, field):
        instant = to_instant(value)
        if instant is not None:
            return instant
    return None


def sort_epoch_ms(record: Any) -> int:
    """Sortable epoch milliseconds for a raw record.

    Walks the published/created/timestamp aliases and the internal
    bookkeeping timestamps, returning the first one that parses. Records
    with no parseable date get 0 and therefore sort as the oldest.
    """
    instant = first_instant(record, aliases.SORT_TIMESTAMP)
    if instant is None:
        return 0
    return max(0, timestamp_to_millis(instant))
