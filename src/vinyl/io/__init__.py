"""
vinyl.io — Settings and loading of the collection file.

Public API:
    - ChartSettings: frozen settings with env > TOML > defaults precedence.
    - load_albums: fetch + parse; returns None when the source is unusable.
    - parse_records / parse_price / parse_rating: text-level parsing helpers.
"""

from __future__ import annotations

from .config import ChartSettings
from .read import (
    fetch_text,
    load_albums,
    load_albums_from_path,
    parse_price,
    parse_rating,
    parse_records,
    read_collection_frame,
)

__all__ = [
    "ChartSettings",
    "fetch_text",
    "load_albums",
    "load_albums_from_path",
    "parse_price",
    "parse_rating",
    "parse_records",
    "read_collection_frame",
]
