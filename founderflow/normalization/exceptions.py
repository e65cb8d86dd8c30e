"""Exceptions raised by the normalization layer.

Data problems never raise; bad input degrades to None or empty values. The
exceptions here signal programming errors by the caller.
"""


class NormalizationError(Exception):
    """Base class for normalization errors."""


class InvalidTagCapError(NormalizationError, ValueError):
    """Raised when a tag cap is not a non-negative integer."""

    def __init__(self, cap: object):
        self.cap = cap
        super().__init__(f"Tag cap must be a non-negative integer, got: {cap!r}")
