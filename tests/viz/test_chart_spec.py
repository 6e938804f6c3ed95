from __future__ import annotations

import math
from typing import Any

from vinyl.core.records import AlbumRecord
from vinyl.io.config import ChartSettings
from vinyl.viz.chart import (
    OWN_SERIES,
    USER_SERIES,
    build_rating_chart,
    connectors_frame,
    points_frame,
    price_frame,
    tooltip_fields,
)
from vinyl.viz.derive import SortMode, ViewState, derive_view

NAN = math.nan


def find_in_spec(obj: Any, predicate) -> bool:
    """Recursively scan a chart spec dict for a predicate match."""
    if isinstance(obj, dict):
        if predicate(obj):
            return True
        return any(find_in_spec(v, predicate) for v in obj.values())
    if isinstance(obj, list):
        return any(find_in_spec(v, predicate) for v in obj)
    return False


def _has_mark(spec: dict, mark_type: str) -> bool:
    def pred(d: dict) -> bool:
        mark = d.get("mark")
        if isinstance(mark, dict):
            return mark.get("type") == mark_type
        return mark == mark_type

    return find_in_spec(spec, pred)


def _collection() -> list[AlbumRecord]:
    return [
        AlbumRecord(
            album="Early",
            release_date="1959-08-17",
            current_price=129.99,
            rym_user_rating=4.3,
            rym_own_rating=5.0,
        ),
        AlbumRecord(
            album="Late",
            release_date="1985-05-01",
            current_price=NAN,
            rym_user_rating=3.8,
            rym_own_rating=NAN,
        ),
        AlbumRecord(
            album="Middle",
            release_date="1970-01-01",
            current_price=60.0,
            rym_user_rating=NAN,
            rym_own_rating=3.5,
        ),
    ]


def test_tooltip_fields_format_price_and_missing_values() -> None:
    early, late, _ = _collection()
    tip = tooltip_fields(early, "PLN")
    assert tip == {
        "album": "Early",
        "release_date": "1959-08-17",
        "user_rating_label": "4.3",
        "own_rating_label": "5.0",
        "price_label": "PLN 129.99",
    }
    tip_late = tooltip_fields(late, "EUR")
    assert tip_late["own_rating_label"] == "n/a"
    assert tip_late["price_label"] == "n/a"


def test_points_frame_has_one_row_per_drawn_point() -> None:
    view = derive_view(_collection())
    assert view is not None
    df = points_frame(view, "PLN")
    pairs = list(zip(df.get_column("series").to_list(), df.get_column("album").to_list()))
    assert pairs == [
        (USER_SERIES, "Early"),
        (USER_SERIES, "Late"),
        (OWN_SERIES, "Early"),
        (OWN_SERIES, "Middle"),
    ]
    assert df.get_column("rating").null_count() == 0


def test_connectors_frame_only_for_records_with_both_ratings() -> None:
    view = derive_view(_collection())
    assert view is not None
    df = connectors_frame(view)
    assert df.to_dicts() == [{"album": "Early", "rym_user_rating": 4.3, "rym_own_rating": 5.0}]


def test_price_frame_keeps_sort_order_and_nulls_missing_prices() -> None:
    view = derive_view(_collection(), ViewState(show_user_rating=False, show_own_rating=False))
    assert view is not None
    df = price_frame(view)
    assert df.get_column("album").to_list() == ["Early", "Middle", "Late"]
    assert df.get_column("current_price").to_list() == [129.99, 60.0, None]


def test_chart_layers_price_area_behind_ratings_with_independent_y() -> None:
    view = derive_view(_collection(), ViewState(sort_mode=SortMode.BY_RELEASE_DATE))
    spec = build_rating_chart(view, ChartSettings()).to_dict()

    assert spec["resolve"]["scale"]["y"] == "independent"
    assert _has_mark(spec["layer"][0], "area")
    assert _has_mark(spec["layer"][1], "circle")
    assert _has_mark(spec["layer"][1], "rule")
    # Rating scale is fixed, price scale niced from zero
    assert find_in_spec(spec, lambda d: d.get("domain") == [2.0, 5.0] and d.get("zero") is False)
    assert find_in_spec(spec, lambda d: d.get("domain") == [0, 250.0] and d.get("nice") is True)
    # Band scale over albums in sort order
    assert find_in_spec(
        spec,
        lambda d: d.get("type") == "band"
        and d.get("domain") == ["Early", "Middle", "Late"]
        and d.get("padding") == 0.8,
    )
    # Series colours
    assert find_in_spec(spec, lambda d: d.get("range") == ["#3D348B", "#E6AF2E"])
    assert find_in_spec(spec, lambda d: d.get("orient") == "right")


def test_chart_without_price_graph_has_no_area() -> None:
    view = derive_view(_collection(), ViewState(show_price_graph=False))
    spec = build_rating_chart(view).to_dict()
    assert not _has_mark(spec, "area")
    assert _has_mark(spec, "circle")
    assert "resolve" not in spec


def test_chart_price_only_has_no_points() -> None:
    view = derive_view(_collection(), ViewState(show_user_rating=False, show_own_rating=False))
    spec = build_rating_chart(view).to_dict()
    assert _has_mark(spec, "area")
    assert not _has_mark(spec, "circle")


def test_chart_currency_label_follows_settings() -> None:
    view = derive_view(_collection())
    spec = build_rating_chart(view, ChartSettings(currency="EUR")).to_dict()
    assert find_in_spec(spec, lambda d: "'EUR '" in str(d.get("labelExpr", "")))


def test_chart_for_absent_data_is_a_placeholder() -> None:
    spec = build_rating_chart(derive_view(None, ViewState())).to_dict()
    assert _has_mark(spec, "text")
    assert not _has_mark(spec, "circle")
    assert not _has_mark(spec, "area")


def test_chart_for_empty_view_is_a_placeholder() -> None:
    state = ViewState(show_user_rating=False, show_own_rating=False, show_price_graph=False)
    spec = build_rating_chart(derive_view(_collection(), state)).to_dict()
    assert _has_mark(spec, "text")
    assert not _has_mark(spec, "area")
