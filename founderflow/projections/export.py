"""Delimited-text export of normalized records."""

import csv
import io
from typing import Any, Iterable, TextIO

from founderflow.domain.models import NormalizedRecord

from .payloads import to_save_payload

EXPORT_COLUMNS = (
    "name",
    "company",
    "role",
    "email",
    "linkedinurl",
    "company_url",
    "apply_url",
    "url",
    "company_info",
    "looking_for",
    "published",
)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def write_csv(records: Iterable[NormalizedRecord], stream: TextIO) -> int:
    """Write the export table to a text stream.

    The header row is bare; every data cell is double-quoted with embedded
    quotes doubled. Rows end with a bare newline.

    Returns:
        Number of data rows written
    """
    stream.write(",".join(EXPORT_COLUMNS) + "\n")
    writer = csv.writer(stream, quoting=csv.QUOTE_ALL, lineterminator="\n")
    count = 0
    for record in records:
        payload = to_save_payload(record)
        writer.writerow([_cell(payload[column]) for column in EXPORT_COLUMNS])
        count += 1
    return count


def render_csv(records: Iterable[NormalizedRecord]) -> str:
    """Render the export table as one string, rows joined by newlines.

    Example:
        >>> render_csv([])
        'name,company,role,email,linkedinurl,company_url,apply_url,url,company_info,looking_for,published'
    """
    buffer = io.StringIO()
    write_csv(records, buffer)
    return buffer.getvalue().rstrip("\n")
