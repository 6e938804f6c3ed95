"""
vinyl.viz — View derivation and Altair chart projection.

Modules:
    - derive: SortMode, ViewState, DerivedView and the pure derive_view pipeline.
    - chart: build_rating_chart and the Polars frames feeding each layer.

Import DAG discipline
- Depends on vinyl.core, vinyl.io.config, polars and altair.
- Must not import streamlit or perform IO.
"""

from __future__ import annotations

from .chart import build_rating_chart, connectors_frame, points_frame, price_frame, tooltip_fields
from .derive import (
    DerivedView,
    SortMode,
    ViewState,
    derive_view,
    filter_by_ratings,
    sort_records,
)

__all__ = [
    "DerivedView",
    "SortMode",
    "ViewState",
    "build_rating_chart",
    "connectors_frame",
    "derive_view",
    "filter_by_ratings",
    "points_frame",
    "price_frame",
    "sort_records",
    "tooltip_fields",
]
