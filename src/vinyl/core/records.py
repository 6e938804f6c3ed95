"""
Pydantic v2 model for one row of the vinyl collection file.

Responsibilities
- Define AlbumRecord, the typed and immutable form of a collection row.
- Expose presence checks used by the rating filter (NaN means "absent").
- Parse the release date text on demand without failing the record.

Style
- Zero-IO (stdlib + pydantic only).
- Numeric fields are plain floats; missing or unparseable values are NaN, never None,
  so that downstream code can compare and sort without Optional checks.

References
- loader: src/vinyl/io/read.py (parse_records builds AlbumRecord instances)
- derivation: src/vinyl/viz/derive.py
"""

from __future__ import annotations

import math
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator

from .constants import DATE_FORMAT

__all__ = [
    "AlbumRecord",
    "is_present",
]


def is_present(value: float | None) -> bool:
    """Return True when a numeric field holds a real value (not None/NaN)."""
    return value is not None and not math.isnan(value)


class AlbumRecord(BaseModel):
    """
    One album of the collection.

    Attributes:
        album (str): Display name. Uniqueness is not enforced.
        current_price (float): Current price; NaN when missing or unparseable.
        release_date (str | None): Release date text, expected as YYYY-MM-DD.
        rym_user_rating (float): Crowd rating in [0, 5]; NaN when absent.
        rym_own_rating (float): Personal rating in [0, 5]; NaN when absent.

    Notes:
        Records are frozen; every UI interaction derives a fresh view from the
        loaded list instead of mutating it.

    Examples:
        >>> from vinyl.core.records import AlbumRecord
        >>> r = AlbumRecord(album="Kind of Blue", rym_user_rating=4.3, rym_own_rating=float("nan"))
        >>> r.has_user_rating, r.has_own_rating
        (True, False)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    album: str = ""
    current_price: float = math.nan
    release_date: str | None = None
    rym_user_rating: float = math.nan
    rym_own_rating: float = math.nan

    @field_validator("current_price", "rym_user_rating", "rym_own_rating", mode="before")
    @classmethod
    def _none_to_nan(cls, v: object) -> object:
        return math.nan if v is None else v

    @field_validator("release_date", mode="before")
    @classmethod
    def _blank_date_to_none(cls, v: object) -> object:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @property
    def has_user_rating(self) -> bool:
        return is_present(self.rym_user_rating)

    @property
    def has_own_rating(self) -> bool:
        return is_present(self.rym_own_rating)

    @property
    def has_price(self) -> bool:
        return is_present(self.current_price)

    def release_day(self) -> date | None:
        """Return the parsed release date, or None when it is missing or malformed."""
        if not self.release_date:
            return None
        try:
            return datetime.strptime(self.release_date, DATE_FORMAT).date()
        except ValueError:
            return None
