"""
Altair projection of a DerivedView: rating points, connectors, price area and axes.

Layout
- x: band scale over DerivedView.axis_albums (padding 0.8, align 0.5), marks centred in
  their band, album labels hidden.
- left y: ratings, fixed domain [rating_min, rating_max], ticks every 0.5, light grid
  at the inner ticks.
- right y: price, domain [0, max_price] niced, 5 ticks labelled "<currency> 0.00";
  resolved independently of the rating scale.

Marks
- Price area (drawn first, behind the ratings) from DerivedView.price_records.
- Grey rules between a record's two ratings from DerivedView.connectors.
- User/own rating points from DerivedView.user_points / own_points, with tooltips.

Notes
- Hidden series are omitted rather than moved off-canvas.
- NaN values are converted to null before serialization (Vega-Lite filters them).
- build_rating_chart never raises for a None or empty view; it returns a text placeholder.
"""

from __future__ import annotations

from collections.abc import Sequence

import altair as alt
import polars as pl

from vinyl.core.constants import (
    BAND_ALIGN,
    CONNECTOR_COLOR,
    OWN_RATING_COLOR,
    POINT_SIZE,
    PRICE_AREA_COLOR,
    PRICE_TICK_COUNT,
    RATING_GRID_TICKS,
    RATING_TICKS,
    USER_RATING_COLOR,
)
from vinyl.core.records import AlbumRecord, is_present
from vinyl.io.config import ChartSettings

from .derive import DerivedView

__all__ = [
    "USER_SERIES",
    "OWN_SERIES",
    "tooltip_fields",
    "points_frame",
    "connectors_frame",
    "price_frame",
    "build_rating_chart",
]

USER_SERIES = "User rating"
OWN_SERIES = "Personal rating"

_TOOLTIP = [
    alt.Tooltip("album:N", title="Album"),
    alt.Tooltip("release_date:N", title="Release Date"),
    alt.Tooltip("user_rating_label:N", title="User Rating"),
    alt.Tooltip("own_rating_label:N", title="Personal Rating"),
    alt.Tooltip("price_label:N", title="Current Price"),
]


def _apply_chart_defaults(ch: alt.TopLevelMixin) -> alt.TopLevelMixin:
    return (
        ch.configure_axis(labelFontSize=12, titleFontSize=12)
        .configure_legend(labelFontSize=12, titleFontSize=12)
        .configure_title(fontSize=14)
        .configure_view(strokeOpacity=0)
    )


def _fmt(value: float, spec: str = "") -> str:
    return format(value, spec) if is_present(value) else "n/a"


def tooltip_fields(record: AlbumRecord, currency: str) -> dict[str, str]:
    """Return the tooltip text for one album.

    Examples:
        >>> r = AlbumRecord(album="A", current_price=99.5, release_date="1970-01-01",
        ...                 rym_user_rating=3.9, rym_own_rating=4.5)
        >>> tooltip_fields(r, "PLN")["price_label"]
        'PLN 99.50'
    """
    price = f"{currency} {record.current_price:.2f}" if record.has_price else "n/a"
    return {
        "album": record.album,
        "release_date": record.release_date or "n/a",
        "user_rating_label": _fmt(record.rym_user_rating),
        "own_rating_label": _fmt(record.rym_own_rating),
        "price_label": price,
    }


# ---------- Frames (Polars) ----------


def _nan_to_null(df: pl.DataFrame) -> pl.DataFrame:
    floats = [c for c, dt in df.schema.items() if dt == pl.Float64]
    if not floats:
        return df
    return df.with_columns([pl.col(c).fill_nan(None) for c in floats])


def points_frame(view: DerivedView, currency: str) -> pl.DataFrame:
    """One row per drawn rating point, with a series label and tooltip text."""
    rows: list[dict[str, object]] = []
    for series, records, attr in (
        (USER_SERIES, view.user_points, "rym_user_rating"),
        (OWN_SERIES, view.own_points, "rym_own_rating"),
    ):
        for r in records:
            rows.append(
                {"series": series, "rating": getattr(r, attr), **tooltip_fields(r, currency)}
            )
    schema = {
        "series": pl.Utf8,
        "rating": pl.Float64,
        "album": pl.Utf8,
        "release_date": pl.Utf8,
        "user_rating_label": pl.Utf8,
        "own_rating_label": pl.Utf8,
        "price_label": pl.Utf8,
    }
    return _nan_to_null(pl.from_dicts(rows, schema=schema))


def _records_frame(records: Sequence[AlbumRecord], columns: list[str]) -> pl.DataFrame:
    schema = {c: (pl.Utf8 if c == "album" else pl.Float64) for c in columns}
    data = {c: [getattr(r, c) for r in records] for c in columns}
    return _nan_to_null(pl.DataFrame(data, schema=schema))


def connectors_frame(view: DerivedView) -> pl.DataFrame:
    """Album plus both ratings for each connector segment."""
    return _records_frame(view.connectors, ["album", "rym_user_rating", "rym_own_rating"])


def price_frame(view: DerivedView) -> pl.DataFrame:
    """Album and price for each point of the price area, in sort order."""
    return _records_frame(view.price_records, ["album", "current_price"])


# ---------- Encodings ----------


def _x(view: DerivedView, settings: ChartSettings) -> alt.X:
    return alt.X(
        "album:N",
        sort=view.axis_albums,
        bandPosition=0.5,
        scale=alt.Scale(
            type="band",
            domain=view.axis_albums,
            padding=settings.band_padding,
            align=BAND_ALIGN,
        ),
        axis=alt.Axis(labels=False, title=None, ticks=True),
    )


def _rating_scale(settings: ChartSettings) -> alt.Scale:
    return alt.Scale(domain=[settings.rating_min, settings.rating_max], zero=False, nice=False)


def _rating_ticks(settings: ChartSettings) -> list[float]:
    return [t for t in RATING_TICKS if settings.rating_min <= t <= settings.rating_max]


def _placeholder(message: str, settings: ChartSettings) -> alt.TopLevelMixin:
    return _apply_chart_defaults(
        alt.Chart(alt.Data(values=[{}]))
        .mark_text(fontSize=14, color="#666")
        .encode(text=alt.value(message))
        .properties(width=settings.width, height=settings.height)
    )


# ---------- Layers ----------


def _price_layer(view: DerivedView, settings: ChartSettings) -> alt.Chart:
    label = f"'{settings.currency} ' + format(datum.value, '.2f')"
    return (
        alt.Chart(alt.Data(values=price_frame(view).to_dicts()))
        .mark_area(color=PRICE_AREA_COLOR, opacity=0.5)
        .encode(
            x=_x(view, settings),
            y=alt.Y(
                "current_price:Q",
                scale=alt.Scale(domain=[0, settings.max_price], nice=True),
                axis=alt.Axis(
                    orient="right",
                    tickCount=PRICE_TICK_COUNT,
                    labelExpr=label,
                    title=f"Current price ({settings.currency})",
                    grid=False,
                ),
            ),
        )
    )


def _grid_layer(settings: ChartSettings) -> alt.Chart:
    values = [
        {"tick": t} for t in RATING_GRID_TICKS if settings.rating_min < t < settings.rating_max
    ]
    return (
        alt.Chart(alt.Data(values=values))
        .mark_rule(color="black", opacity=0.2)
        .encode(y=alt.Y("tick:Q", scale=_rating_scale(settings), axis=None))
    )


def _connector_layer(view: DerivedView, settings: ChartSettings) -> alt.Chart:
    return (
        alt.Chart(alt.Data(values=connectors_frame(view).to_dicts()))
        .mark_rule(color=CONNECTOR_COLOR, strokeWidth=4, opacity=0.5)
        .encode(
            x=_x(view, settings),
            y=alt.Y("rym_user_rating:Q", scale=_rating_scale(settings), axis=None),
            y2="rym_own_rating:Q",
        )
    )


def _points_layer(view: DerivedView, settings: ChartSettings) -> alt.Chart:
    return (
        alt.Chart(alt.Data(values=points_frame(view, settings.currency).to_dicts()))
        .mark_circle(size=POINT_SIZE, opacity=1.0)
        .encode(
            x=_x(view, settings),
            y=alt.Y(
                "rating:Q",
                scale=_rating_scale(settings),
                axis=alt.Axis(orient="left", values=_rating_ticks(settings), title="Rating"),
            ),
            color=alt.Color(
                "series:N",
                scale=alt.Scale(
                    domain=[USER_SERIES, OWN_SERIES],
                    range=[USER_RATING_COLOR, OWN_RATING_COLOR],
                ),
                legend=alt.Legend(title=None, orient="top"),
            ),
            tooltip=_TOOLTIP,
        )
    )


def build_rating_chart(
    view: DerivedView | None, settings: ChartSettings | None = None
) -> alt.TopLevelMixin:
    """Build the layered rating/price chart for a derived view.

    Args:
        view (DerivedView | None): Output of derive_view; None when no data is loaded.
        settings (ChartSettings | None): Axis domains, size and currency.

    Returns:
        alt.TopLevelMixin: Layered chart, or a text placeholder when there is nothing to draw.
    """
    cfg = settings or ChartSettings()
    if view is None:
        return _placeholder("No collection data loaded.", cfg)
    if view.is_empty:
        return _placeholder("Nothing to show for the selected series.", cfg)

    rating_layers: list[alt.Chart] = []
    if view.user_points or view.own_points or view.connectors:
        rating_layers.append(_grid_layer(cfg))
    if view.connectors:
        rating_layers.append(_connector_layer(view, cfg))
    if view.user_points or view.own_points:
        rating_layers.append(_points_layer(view, cfg))

    parts: list[alt.Chart | alt.LayerChart] = []
    if view.price_records:
        parts.append(_price_layer(view, cfg))
    if rating_layers:
        parts.append(alt.layer(*rating_layers))

    chart = alt.layer(*parts)
    if len(parts) > 1:
        chart = chart.resolve_scale(y="independent")
    return _apply_chart_defaults(chart.properties(width=cfg.width, height=cfg.height))
