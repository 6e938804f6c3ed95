"""
Vinyl App UI package.

This package contains the Streamlit UI for the vinyl collection chart. It exposes
the orchestration entrypoint and focused modules for separate concerns.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - header: Global header (source selection, cache preferences, refresh).
    - controls: Sidebar toggles producing a ViewState.
    - helpers: Small cross-cutting helpers (KPIs, record table rows).

Usage:
    from app.ui import streamlit_app
    streamlit_app(default_source="http://localhost:3000/albums.csv")
"""

from __future__ import annotations

from .app import streamlit_app
from .header import render_header

__all__ = [
    "streamlit_app",
    "render_header",
]
