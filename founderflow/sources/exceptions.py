"""Custom exceptions for record import sources."""

from typing import Optional


class RecordImportError(Exception):
    """An import file could not be read or does not hold a record list.

    Raised for missing files, undecodable content and top-level shapes that
    are not a list of records. Individual malformed records never raise;
    they are skipped or normalized leniently.
    """

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None) -> None:
        """Initialize import error with the offending location.

        Args:
            message: Human-readable error message
            path: File that failed ("<stdin>" for standard input)
            line: 1-based line number for JSON Lines errors
        """
        super().__init__(message)
        self.path = path
        self.line = line
