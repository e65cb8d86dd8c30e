"""Projections of normalized records for rendering, saving, outreach and export."""

from .export import EXPORT_COLUMNS, render_csv, write_csv
from .payloads import (
    SAVE_PAYLOAD_FIELDS,
    UNKNOWN_COMPANY,
    avatar_initials,
    favicon_url,
    to_display,
    to_prompt_context,
    to_save_payload,
)

__all__ = [
    "EXPORT_COLUMNS",
    "SAVE_PAYLOAD_FIELDS",
    "UNKNOWN_COMPANY",
    "avatar_initials",
    "favicon_url",
    "render_csv",
    "to_display",
    "to_prompt_context",
    "to_save_payload",
    "write_csv",
]
