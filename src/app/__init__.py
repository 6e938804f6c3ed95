from __future__ import annotations

"""
Top-level Streamlit app package.

This package hosts the interactive vinyl collection chart (Streamlit) decoupled
from the vinyl.* library modules. Loading, derivation and chart building remain
under vinyl.*; the Streamlit UI shell and app-specific helpers live here.

CLI entrypoint (configured in pyproject.toml):
    vinyl-app = app.main:main
"""
