"""
Exception types raised by the vinyl loader and configuration layer.

Provides typed exceptions for failures that callers may want to tell apart:
- SourceUnavailableError when the collection file cannot be fetched.
- RecordFormatError when the header row lacks a mandatory column.
- ConfigError when ChartSettings carries values the chart cannot use.

Notes:
    - Row-level parse failures are not errors; numeric fields fall back to NaN.
    - vinyl.io.read.load_albums catches VinylError and returns None so that the
      chart renders an empty state instead of crashing.

Examples:
    >>> from vinyl.core.errors import RecordFormatError, VinylError
    >>> issubclass(RecordFormatError, VinylError)
    True
"""

from __future__ import annotations

__all__ = [
    "VinylError",
    "SourceUnavailableError",
    "RecordFormatError",
    "ConfigError",
]


class VinylError(Exception):
    """Base class for vinyl errors. Use as a catch-all for loader/config failures."""


class SourceUnavailableError(VinylError):
    """
    Raised when the collection source cannot be fetched.

    Examples:
        - Connection refused or DNS failure
        - Non-2xx HTTP status
        - Local path does not exist
    """


class RecordFormatError(VinylError, ValueError):
    """Header row is missing a mandatory column (album, rym_user_rating, rym_own_rating)."""


class ConfigError(VinylError, ValueError):
    """Invalid chart configuration (e.g., non-positive max price, empty delimiter)."""
