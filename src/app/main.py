"""
Vinyl App entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        python -m app.main --source http://localhost:3000/albums.csv --cache-ttl 600

    - Streamlit direct:
        streamlit run src/app/main.py -- --source data/albums.csv
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from app.ui import streamlit_app


def _parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Vinyl collection chart", add_help=add_help)
    parser.add_argument(
        "--source",
        default=None,
        help="URL or path of the collection file (defaults to VINYL_SOURCE_URL / vinyl.toml).",
    )
    parser.add_argument(
        "--cache-ttl",
        type=int,
        default=600,
        help="Cache lifetime (seconds) for the fetched collection (0 disables expiry).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the vinyl UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader, passing through any supported options after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _parser().parse_args(args)

    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(default_source=ns.source, default_cache_ttl=int(ns.cache_ttl))
        return

    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.source:
        passthrough += ["--source", ns.source]
    if ns.cache_ttl is not None:
        passthrough += ["--cache-ttl", str(int(ns.cache_ttl))]
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Support: --source, --cache-ttl after '--' when using `streamlit run`
    try:
        ns, _ = _parser(add_help=False).parse_known_args(sys.argv[1:])
        streamlit_app(default_source=ns.source, default_cache_ttl=int(ns.cache_ttl))
    except SystemExit:
        streamlit_app()
