"""
Shared UI helper utilities for the vinyl Streamlit application.

This module centralizes small helpers (collection KPIs, table rows, number
formatting) used by the app orchestrator. It contains no Streamlit state
manipulation itself, so everything here is testable on plain record lists.

Notes:
    - NaN ratings and prices are skipped by the aggregates, matching how the
      chart treats them as absent.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import polars as pl

from vinyl.core.records import AlbumRecord


def format_number(value: float, decimals: int = 2) -> str:
    """Format a float with fixed decimals, or "n/a" for NaN.

    Args:
        value (float): Number to format.
        decimals (int): Digits after the decimal point.

    Returns:
        str: Formatted number or "n/a".
    """
    if math.isnan(value):
        return "n/a"
    return f"{value:.{decimals}f}"


def records_frame(records: Sequence[AlbumRecord]) -> pl.DataFrame:
    """Return the records as a Polars DataFrame in the order given (for the Data tab)."""
    return pl.DataFrame(
        [r.model_dump() for r in records],
        schema={
            "album": pl.Utf8,
            "current_price": pl.Float64,
            "release_date": pl.Utf8,
            "rym_user_rating": pl.Float64,
            "rym_own_rating": pl.Float64,
        },
    )


def _or_nan(value: float | None) -> float:
    return math.nan if value is None else float(value)


def compute_collection_kpis(records: Sequence[AlbumRecord]) -> dict[str, float]:
    """Compute quick KPI metrics over the loaded collection.

    Computes:
        - albums: Number of records.
        - mean_user_rating: Mean of present user ratings (NaN if none).
        - mean_own_rating: Mean of present own ratings (NaN if none).
        - total_price: Sum of present prices (0.0 if none).

    Args:
        records (Sequence[AlbumRecord]): Loaded collection.

    Returns:
        dict[str, float]: KPI dictionary.
    """
    if not records:
        return {
            "albums": 0.0,
            "mean_user_rating": math.nan,
            "mean_own_rating": math.nan,
            "total_price": 0.0,
        }
    df = records_frame(records).with_columns(
        pl.col("current_price", "rym_user_rating", "rym_own_rating").fill_nan(None)
    )
    agg = df.select(
        pl.len().alias("albums"),
        pl.col("rym_user_rating").mean().alias("mean_user_rating"),
        pl.col("rym_own_rating").mean().alias("mean_own_rating"),
        pl.col("current_price").sum().alias("total_price"),
    ).row(0, named=True)
    return {
        "albums": float(agg["albums"]),
        "mean_user_rating": _or_nan(agg["mean_user_rating"]),
        "mean_own_rating": _or_nan(agg["mean_own_rating"]),
        "total_price": float(agg["total_price"] or 0.0),
    }
