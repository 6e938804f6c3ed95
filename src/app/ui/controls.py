"""
Sidebar chart controls for the vinyl Streamlit application.

Renders the series checkboxes and the sort radio and folds them into an
immutable ViewState. Widget keys are stable so selections survive reruns.
"""

from __future__ import annotations

import streamlit as st

from vinyl.viz import SortMode, ViewState

SORT_LABELS: dict[SortMode, str] = {
    SortMode.BY_RELEASE_DATE: "Release date",
    SortMode.BY_PRICE: "Price",
}


def render_controls() -> ViewState:
    """Render the sidebar toggles and return the resulting ViewState.

    Returns:
        ViewState: All series on and sorted by release date unless changed by the user.
    """
    with st.sidebar.expander("Chart Controls", expanded=True):
        show_user = st.checkbox("Show User Rating", value=True, key="show_user_rating")
        show_own = st.checkbox("Show Personal Rating", value=True, key="show_own_rating")
        show_price = st.checkbox("Show Price Graph", value=True, key="show_price_graph")
        sort_mode = st.radio(
            "Sort by",
            options=list(SORT_LABELS),
            index=0,
            format_func=lambda mode: SORT_LABELS[mode],
            key="sort_mode",
        )
    return ViewState(
        show_user_rating=bool(show_user),
        show_own_rating=bool(show_own),
        show_price_graph=bool(show_price),
        sort_mode=SortMode(sort_mode),
    )
