"""
Header (global controls) for the vinyl Streamlit application.

This module renders the top-of-page controls, including:
- Collection source (URL or local path), defaulting to ChartSettings.source_url.
- Manual refresh button that drops the cached collection.
- Cache preferences panel and construction of the CacheConfig used by app.data.
"""

from __future__ import annotations

import streamlit as st

from app.data import CacheConfig, clear_collection_cache


def render_header(
    *,
    default_source: str,
    default_cache_ttl: int,
) -> tuple[str, CacheConfig]:
    """Render the global header and return the selected source and cache config.

    Args:
        default_source (str): Source shown on first render.
        default_cache_ttl (int): Initial cache TTL in seconds (0 disables expiry).

    Returns:
        tuple[str, CacheConfig]: (source_url_or_path, cache_config)
    """
    st.markdown("### Vinyl collection data")

    # Session defaults
    if "source" not in st.session_state:
        st.session_state["source"] = default_source
    if "cache_ttl" not in st.session_state:
        st.session_state["cache_ttl"] = int(default_cache_ttl)
    if "cache_persist" not in st.session_state:
        st.session_state["cache_persist"] = False

    c1, c2, c3 = st.columns([0.62, 0.13, 0.25])

    with c1:
        source = st.text_input(
            "Collection source",
            value=st.session_state["source"],
            help="URL or local path of the semicolon-delimited collection file.",
            key="source_header",
        )
        st.session_state["source"] = source.strip() or default_source

    with c2:
        if st.button("Refresh"):
            clear_collection_cache()
            st.rerun()

    with c3:
        with st.expander("Cache", expanded=False):
            ttl = st.number_input(
                "Cache TTL (seconds)",
                min_value=0,
                value=int(st.session_state["cache_ttl"]),
                step=60,
                help="0 disables TTL",
                key="cache_ttl_header",
            )
            persist = st.checkbox(
                "Persist to disk",
                value=bool(st.session_state["cache_persist"]),
                key="cache_persist_header",
            )
            st.session_state["cache_ttl"] = int(ttl)
            st.session_state["cache_persist"] = bool(persist)

    cache_cfg = CacheConfig(
        ttl=int(st.session_state["cache_ttl"]) if int(st.session_state["cache_ttl"]) > 0 else None,
        persist=bool(st.session_state["cache_persist"]),
    )
    return (st.session_state["source"], cache_cfg)
