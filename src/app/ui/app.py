"""
Streamlit application orchestrator for the vinyl collection chart.

This module composes the global header, the sidebar controls and the page tabs
while delegating loading, derivation and chart building to vinyl.* modules.

Responsibilities:
    - Configure Streamlit page and logging.
    - Render global header (source, cache prefs) and sidebar controls.
    - Load the collection via app.data with configurable caching.
    - Derive the view for the current toggles and mount the tabs (Chart, Data).

Notes:
    - Every widget change reruns this script: the view is re-derived from the
      cached records and the chart is rebuilt from scratch.
    - An unavailable source renders an info message and an empty chart.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, cast

import streamlit as st

from app.data import load_collection
from vinyl.core.logging import setup_logging
from vinyl.io import ChartSettings
from vinyl.viz import build_rating_chart, derive_view

from .controls import render_controls
from .header import render_header
from .helpers import compute_collection_kpis, format_number, records_frame

logger = logging.getLogger(__name__)


def streamlit_app(
    default_source: str | None = None,
    default_cache_ttl: int = 600,
) -> None:
    """Render the vinyl Streamlit application.

    Args:
        default_source (str | None): Optional preselected source; defaults to the
            source_url from ChartSettings.load().
        default_cache_ttl (int): Initial cache TTL (seconds) for the collection loader.

    Returns:
        None
    """
    setup_logging()
    st.set_page_config(page_title="Vinyl collection", layout="wide")

    try:
        settings = ChartSettings.load().validate()
    except ValueError as e:
        st.error(f"Invalid chart settings: {e}")
        return

    source, cache_cfg = render_header(
        default_source=default_source or settings.source_url,
        default_cache_ttl=default_cache_ttl,
    )
    settings = replace(settings, source_url=source)
    state = render_controls()

    with st.spinner("Loading collection ..."):
        records = load_collection(settings, cfg=cache_cfg)
    if records is None:
        st.info(f"Collection not available from {source}.")

    view = derive_view(records, state)

    tab_chart, tab_data = st.tabs(["Chart", "Data"])

    # ----------------------------
    # Chart
    # ----------------------------
    with tab_chart:
        if records is not None:
            kpi = compute_collection_kpis(records)
            c1, c2, c3, c4 = st.columns(4)
            with c1:
                st.metric("Albums", f"{int(kpi['albums'])}")
            with c2:
                st.metric("Mean user rating", format_number(kpi["mean_user_rating"]))
            with c3:
                st.metric("Mean personal rating", format_number(kpi["mean_own_rating"]))
            with c4:
                st.metric(
                    "Collection value",
                    f"{settings.currency} {format_number(kpi['total_price'])}",
                )
            if view is not None and len(view.rating_records) != len(view.sorted_records):
                st.caption(
                    f"Showing ratings for {len(view.rating_records)} of "
                    f"{len(view.sorted_records)} albums."
                )

        try:
            ch = build_rating_chart(view, settings)
            st.altair_chart(cast(Any, ch), theme=None, use_container_width=True)
        except Exception as e:  # pragma: no cover
            logger.exception("Chart rendering failed")
            st.error(f"Failed to render chart: {e}")

    # ----------------------------
    # Data (table viewer)
    # ----------------------------
    with tab_data:
        if records is None:
            st.caption("No collection loaded.")
        else:
            st.subheader("Collection (parsed)")
            frame = records_frame(view.sorted_records if view is not None else records)
            st.dataframe(frame, width="stretch")
            st.text(f"Rows: {frame.height}, Columns: {list(frame.columns)}")
