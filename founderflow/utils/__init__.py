"""Utility functions for hashing, time handling, and text matching."""

from .hashing import compute_record_id, hash_string
from .text import collapse_whitespace, initials_for, normalize_for_matching
from .timestamps import (
    days_between,
    ensure_utc,
    format_short_date,
    millis_to_timestamp,
    parse_datetime,
    parse_iso_datetime,
    timestamp_to_millis,
    unix_to_timestamp,
    utc_now,
)

__all__ = [
    # Hashing
    "compute_record_id",
    "hash_string",
    # Text
    "collapse_whitespace",
    "initials_for",
    "normalize_for_matching",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "parse_datetime",
    "unix_to_timestamp",
    "millis_to_timestamp",
    "timestamp_to_millis",
    "format_short_date",
    "days_between",
]
