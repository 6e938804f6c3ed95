"""
Pure derivation of the chart view from album records and toggle state.

Pipeline
- sort_records(): deterministic ordering of the full list (release date or price).
- filter_by_ratings(): rating-presence filter applied only when a rating series is off.
- derive_view(): (records, ViewState) -> DerivedView, the data handed to the chart layer.

Series sourcing
- Rating points and connectors come from the rating-filtered list.
- The price area comes from the sorted but rating-unfiltered list, so hiding both
  rating series still leaves the full price curve. The two lists may differ in length.

Ordering rules
- BY_RELEASE_DATE: ascending by parsed date; missing or malformed dates sort last.
- BY_PRICE: ascending by price; NaN prices sort last.
- Both sorts are stable, so ties keep file order.

Notes
- No Streamlit, no Altair: every function here is callable and testable on plain lists.
- Records are never mutated; each call returns fresh lists.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from vinyl.core.records import AlbumRecord

__all__ = [
    "SortMode",
    "ViewState",
    "DerivedView",
    "sort_records",
    "filter_by_ratings",
    "derive_view",
]


class SortMode(str, Enum):
    """Ordering of the categorical album axis."""

    BY_RELEASE_DATE = "release_date"
    BY_PRICE = "price"


@dataclass(frozen=True)
class ViewState:
    """Chart toggle state; all series on and sorted by release date by default."""

    show_user_rating: bool = True
    show_own_rating: bool = True
    show_price_graph: bool = True
    sort_mode: SortMode = SortMode.BY_RELEASE_DATE

    @property
    def both_ratings(self) -> bool:
        return self.show_user_rating and self.show_own_rating


@dataclass(frozen=True)
class DerivedView:
    """
    Sorted and filtered projection of the collection for one ViewState.

    Attributes:
        state (ViewState): Toggle state this view was derived for.
        axis_albums (list[str]): Categorical axis domain in sorted order (first occurrence wins).
        sorted_records (list[AlbumRecord]): Full list in sort order.
        rating_records (list[AlbumRecord]): sorted_records after the rating filter.
        user_points (list[AlbumRecord]): Records drawn as user-rating points.
        own_points (list[AlbumRecord]): Records drawn as own-rating points.
        connectors (list[AlbumRecord]): Records with a segment between their two ratings.
        price_records (list[AlbumRecord]): Input of the price area (rating-unfiltered).
    """

    state: ViewState
    axis_albums: list[str] = field(default_factory=list)
    sorted_records: list[AlbumRecord] = field(default_factory=list)
    rating_records: list[AlbumRecord] = field(default_factory=list)
    user_points: list[AlbumRecord] = field(default_factory=list)
    own_points: list[AlbumRecord] = field(default_factory=list)
    connectors: list[AlbumRecord] = field(default_factory=list)
    price_records: list[AlbumRecord] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.user_points or self.own_points or self.connectors or self.price_records)


# ---------- Sorting ----------


def _date_key(record: AlbumRecord) -> tuple[bool, date]:
    day = record.release_day()
    return (day is None, day or date.min)


def _price_key(record: AlbumRecord) -> tuple[bool, float]:
    price = record.current_price
    missing = math.isnan(price)
    return (missing, 0.0 if missing else price)


def sort_records(records: Sequence[AlbumRecord], mode: SortMode) -> list[AlbumRecord]:
    """Return a new list ordered for the album axis.

    Args:
        records (Sequence[AlbumRecord]): Records in file order.
        mode (SortMode): BY_RELEASE_DATE or BY_PRICE.

    Returns:
        list[AlbumRecord]: Stable ascending order; records whose key is missing
        (unparseable date, NaN price) are placed last in file order.
    """
    if mode is SortMode.BY_PRICE:
        return sorted(records, key=_price_key)
    return sorted(records, key=_date_key)


# ---------- Filtering ----------


def filter_by_ratings(records: Sequence[AlbumRecord], state: ViewState) -> list[AlbumRecord]:
    """Keep records that have a value for at least one enabled rating series.

    When both rating series are on, nothing is filtered. With both off the result is empty.
    """
    if state.both_ratings:
        return list(records)
    return [
        r
        for r in records
        if (state.show_user_rating and r.has_user_rating)
        or (state.show_own_rating and r.has_own_rating)
    ]


def _unique_albums(records: Sequence[AlbumRecord]) -> list[str]:
    return list(dict.fromkeys(r.album for r in records))


# ---------- Derivation ----------


def derive_view(
    records: Sequence[AlbumRecord] | None, state: ViewState | None = None
) -> DerivedView | None:
    """Derive everything the chart draws for one toggle state.

    Args:
        records (Sequence[AlbumRecord] | None): Loaded collection, or None when the
            source was unavailable.
        state (ViewState | None): Toggle state; defaults to ViewState().

    Returns:
        DerivedView | None: None when records is None (nothing is computed);
        otherwise the derived series.
    """
    if records is None:
        return None
    state = state or ViewState()

    sorted_records = sort_records(records, state.sort_mode)
    rating_records = filter_by_ratings(sorted_records, state)

    user_points = (
        [r for r in rating_records if r.has_user_rating] if state.show_user_rating else []
    )
    own_points = [r for r in rating_records if r.has_own_rating] if state.show_own_rating else []
    connectors = (
        [r for r in rating_records if r.has_user_rating and r.has_own_rating]
        if state.both_ratings
        else []
    )

    # Price area is drawn from the unfiltered sort order, independent of rating toggles.
    if state.show_price_graph:
        price_records = list(sorted_records)
    else:
        price_records = []

    return DerivedView(
        state=state,
        axis_albums=_unique_albums(sorted_records),
        sorted_records=sorted_records,
        rating_records=rating_records,
        user_points=user_points,
        own_points=own_points,
        connectors=connectors,
        price_records=price_records,
    )
