"""Readers for record import files.

Supported layouts:
- JSON array of records
- JSON object with a ``records`` list
- JSON Lines (one record per line, blank lines ignored)
- YAML list of records (or a mapping with a ``records`` list)

The format is chosen from the file suffix; ``-`` reads JSON from stdin.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

import yaml

from founderflow.logging import get_logger

from .exceptions import RecordImportError

logger = get_logger(__name__, component="import")

JSON_LINES_SUFFIXES = {".jsonl", ".ndjson"}
YAML_SUFFIXES = {".yaml", ".yml"}

RECORDS_KEY = "records"


def _unwrap(data: Any, source: str) -> List[Any]:
    if isinstance(data, dict) and isinstance(data.get(RECORDS_KEY), list):
        return data[RECORDS_KEY]
    if isinstance(data, list):
        return data
    raise RecordImportError(
        f"Expected a list of records or an object with a '{RECORDS_KEY}' list in {source}",
        path=source,
    )


def _keep_mappings(items: List[Any], source: str) -> List[Dict[str, Any]]:
    records = []
    for position, item in enumerate(items):
        if isinstance(item, dict):
            records.append(item)
            continue
        logger.warning(
            f"Skipping non-object entry at position {position} in {source}",
            extra={
                "event": "import.record.skipped",
                "source": source,
                "position": position,
                "entry_type": type(item).__name__,
            },
        )
    return records


def parse_json(text: str, source: str = "<string>") -> List[Dict[str, Any]]:
    """Parse a JSON document holding records."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RecordImportError(f"Invalid JSON in {source}: {e}", path=source, line=e.lineno)
    return _keep_mappings(_unwrap(data, source), source)


def parse_json_lines(text: str, source: str = "<string>") -> List[Dict[str, Any]]:
    """Parse JSON Lines, one record per non-blank line."""
    items = []
    for lineno, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            items.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise RecordImportError(
                f"Invalid JSON on line {lineno} of {source}: {e.msg}",
                path=source,
                line=lineno,
            )
    return _keep_mappings(items, source)


def parse_yaml(text: str, source: str = "<string>") -> List[Dict[str, Any]]:
    """Parse a YAML document holding records."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RecordImportError(f"Invalid YAML in {source}: {e}", path=source)
    if data is None:
        return []
    return _keep_mappings(_unwrap(data, source), source)


def read_records(path: Union[str, Path], stdin: Optional[TextIO] = None) -> List[Dict[str, Any]]:
    """Read raw records from an import file.

    Args:
        path: File path, or "-" for JSON on stdin
        stdin: Stream used when path is "-" (defaults to sys.stdin)

    Returns:
        List of raw record dicts in file order

    Raises:
        RecordImportError: If the file is missing, unreadable or malformed
    """
    if str(path) == "-":
        source = "<stdin>"
        text = (stdin or sys.stdin).read()
        records = parse_json(text, source)
    else:
        file_path = Path(path)
        source = str(file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise RecordImportError(f"Import file not found: {source}", path=source)
        except (OSError, UnicodeDecodeError) as e:
            raise RecordImportError(f"Failed to read import file {source}: {e}", path=source)

        suffix = file_path.suffix.lower()
        if suffix in JSON_LINES_SUFFIXES:
            records = parse_json_lines(text, source)
        elif suffix in YAML_SUFFIXES:
            records = parse_yaml(text, source)
        else:
            records = parse_json(text, source)

    logger.info(
        f"Loaded {len(records)} records from {source}",
        extra={
            "event": "import.records.loaded",
            "source": source,
            "record_count": len(records),
        },
    )
    return records
