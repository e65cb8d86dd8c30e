"""Hashing utilities for deriving stable record identifiers.

Import files do not always carry an ``id``. A derived id lets saved payloads,
exports and duplicate reports refer to the same record across runs.
"""

import hashlib
from typing import Optional

from .text import collapse_whitespace


def compute_record_id(
    company: Optional[str],
    contact_name: Optional[str],
    *links: Optional[str],
) -> str:
    """Compute a deterministic id from a record's identifying fields.

    The id is the first 16 hex characters of a SHA256 over the normalized
    company, contact name and any non-empty links, joined by ``|``.

    Args:
        company: Company name (may be None)
        contact_name: Contact name (may be None)
        *links: Resolved contact links in a fixed order

    Returns:
        16-character hexadecimal id

    Example:
        >>> compute_record_id("Acme", "Jane Doe") == compute_record_id(" acme ", "jane  doe")
        True
    """
    parts = [_normalize_text(company or ""), _normalize_text(contact_name or "")]
    parts.extend(_normalize_text(link) for link in links if link)
    return hash_string("|".join(parts))[:16]


def _normalize_text(text: str) -> str:
    """Lower-case, trim and collapse whitespace for stable hashing."""
    return collapse_whitespace(text.lower())


def hash_string(value: str) -> str:
    """Compute SHA256 hex digest of a string value."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()
