"""Record import sources (JSON, JSON Lines, YAML)."""

from .exceptions import RecordImportError
from .reader import parse_json, parse_json_lines, parse_yaml, read_records

__all__ = [
    "RecordImportError",
    "parse_json",
    "parse_json_lines",
    "parse_yaml",
    "read_records",
]
