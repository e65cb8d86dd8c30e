"""Timestamp utilities for UTC handling and datetime parsing.

This module provides the low-level pieces the timestamp normalizer builds on:
- Getting current UTC time
- Coercing naive/foreign datetimes to aware UTC
- Parsing ISO 8601 strings, with a python-dateutil fallback for free-form dates
- Converting between datetimes and epoch seconds/milliseconds
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from dateutil import parser as date_parser

Number = Union[int, float]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC. Plain ``date`` values become midnight UTC.

    Args:
        dt: Datetime (or date) to convert, may be None

    Returns:
        Timezone-aware datetime in UTC, or None if input is None

    Example:
        >>> naive = datetime(2025, 11, 4, 12, 0, 0)
        >>> ensure_utc(naive).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None

    if not isinstance(dt, datetime):
        return datetime.combine(dt, time.min, tzinfo=timezone.utc)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: str) -> Optional[datetime]:
    """Parse an ISO 8601 datetime string to UTC datetime.

    Supports:
    - 2025-11-04T12:00:00Z
    - 2025-11-04T12:00:00.123Z
    - 2025-11-04T12:00:00+00:00
    - 2025-11-04T12:00:00
    - 2025-11-04

    Args:
        iso_string: ISO 8601 formatted datetime string

    Returns:
        Timezone-aware datetime in UTC, or None if parsing fails
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except (ValueError, TypeError):
        pass

    for fmt in ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d"):
        try:
            return ensure_utc(datetime.strptime(iso_string.strip(), fmt))
        except ValueError:
            continue

    return None


def parse_datetime(value: str) -> Optional[datetime]:
    """Parse a free-form date string to UTC datetime.

    Tries ISO 8601 first, then python-dateutil's general parser (RFC 2822
    dates, "Nov 4, 2025", "11/04/2025", ...). Fuzzy parsing is off so that
    arbitrary prose never turns into a date.

    Args:
        value: Date string in any common format

    Returns:
        Timezone-aware datetime in UTC, or None if the string is not a date
    """
    parsed = parse_iso_datetime(value)
    if parsed is not None:
        return parsed

    try:
        return ensure_utc(date_parser.parse(value.strip()))
    except (ValueError, OverflowError, TypeError):
        return None


def unix_to_timestamp(unix_seconds: Number) -> datetime:
    """Convert epoch seconds to an aware UTC datetime.

    Raises:
        OverflowError, ValueError, OSError: If the value is out of range

    Example:
        >>> unix_to_timestamp(1730728800).tzinfo == timezone.utc
        True
    """
    return datetime.fromtimestamp(unix_seconds, tz=timezone.utc)


def millis_to_timestamp(unix_millis: Number) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime.

    Raises:
        OverflowError: If the value is out of range
    """
    return EPOCH + timedelta(milliseconds=unix_millis)


def timestamp_to_millis(dt: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are treated as UTC)."""
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return 0
    return (dt_utc - EPOCH) // timedelta(milliseconds=1)


def format_short_date(dt: datetime) -> str:
    """Format a datetime as an unpadded month/day/year string.

    Example:
        >>> format_short_date(datetime(2023, 11, 4, tzinfo=timezone.utc))
        '11/4/2023'
    """
    dt_utc = ensure_utc(dt)
    return f"{dt_utc.month}/{dt_utc.day}/{dt_utc.year}"


def days_between(earlier: Union[date, datetime], later: Union[date, datetime]) -> int:
    """Whole UTC calendar days from ``earlier`` to ``later`` (negative if reversed)."""
    return (ensure_utc(later).date() - ensure_utc(earlier).date()).days
