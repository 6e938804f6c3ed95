"""
vinyl.core — Zero-IO building blocks shared by the loader and the chart layer.

Modules:
    - records: AlbumRecord model (pydantic, frozen).
    - constants: Chart, axis and colour defaults.
    - errors: VinylError hierarchy.
    - logging: setup_logging helper.
"""

from __future__ import annotations

from .errors import ConfigError, RecordFormatError, SourceUnavailableError, VinylError
from .records import AlbumRecord

__all__ = [
    "AlbumRecord",
    "VinylError",
    "SourceUnavailableError",
    "RecordFormatError",
    "ConfigError",
]
