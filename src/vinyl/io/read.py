"""
Loader for the semicolon-delimited vinyl collection file.

Overview
- fetch_text(): One unauthenticated HTTP GET returning the response body.
- parse_records(): Header-mapped parsing into AlbumRecord instances (Polars, all-strings read).
- load_albums(): fetch + parse, returning None instead of raising on source/format failures.

Coercion rules
- current_price: whitespace stripped, first decimal comma replaced by a point, then cast
  to float; anything unparseable becomes NaN.
- rym_user_rating / rym_own_rating: whitespace stripped and cast to float; NaN on failure.
- release_date: kept as text; blank becomes None.
- Rows are never dropped because a field failed to coerce.

Import DAG discipline
- Depends on stdlib, polars, requests and vinyl.core; does not import vinyl.viz or app.
"""

from __future__ import annotations

import io
import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import polars as pl
import requests

from vinyl.core.constants import DEFAULT_DELIMITER, OPTIONAL_COLUMNS, REQUIRED_COLUMNS
from vinyl.core.errors import RecordFormatError, SourceUnavailableError, VinylError
from vinyl.core.records import AlbumRecord

from .config import ChartSettings

__all__ = [
    "fetch_text",
    "parse_price",
    "parse_rating",
    "parse_records",
    "read_collection_frame",
    "load_albums",
    "load_albums_from_path",
]

logger = logging.getLogger(__name__)


# ---------- Column coercion (Polars expressions, shared by scalar helpers) ----------


def _price_expr(name: str) -> pl.Expr:
    return (
        pl.col(name)
        .str.strip_chars()
        .str.replace(",", ".", literal=True)
        .cast(pl.Float64, strict=False)
        .alias(name)
    )


def _rating_expr(name: str) -> pl.Expr:
    return pl.col(name).str.strip_chars().cast(pl.Float64, strict=False).alias(name)


def _coerce_scalar(text: str | None, make_expr: Callable[[str], pl.Expr]) -> float:
    if text is None:
        return math.nan
    # Same expressions as the column parsing so scalar and frame results agree.
    value = pl.DataFrame({"v": [text]}, schema={"v": pl.Utf8}).select(make_expr("v")).item()
    return math.nan if value is None else float(value)


def parse_price(text: str | None) -> float:
    """Parse a price that may use a decimal comma.

    Args:
        text (str | None): Raw field text, e.g. "123,45" or "123.45".

    Returns:
        float: Parsed value, or NaN when the text is missing or unparseable.

    Examples:
        >>> parse_price("123,45")
        123.45
    """
    return _coerce_scalar(text, _price_expr)


def parse_rating(text: str | None) -> float:
    """Parse a rating field; NaN when missing or unparseable."""
    return _coerce_scalar(text, _rating_expr)


# ---------- Parsing ----------


def read_collection_frame(text: str, *, delimiter: str = DEFAULT_DELIMITER) -> pl.DataFrame:
    """Read collection text into a typed DataFrame with the canonical columns.

    All columns are read as strings, header names are stripped, missing optional
    columns are added as nulls, and numeric columns are coerced.

    Args:
        text (str): Delimited text including a header row.
        delimiter (str): Field separator.

    Returns:
        pl.DataFrame: Columns album, current_price, release_date, rym_user_rating,
        rym_own_rating in that order, one row per input row.

    Raises:
        RecordFormatError: If the text cannot be read as delimited rows or a
            mandatory column is missing from the header.
    """
    body = text.lstrip("\ufeff")
    if not body.strip():
        return pl.DataFrame(
            schema={
                "album": pl.Utf8,
                "current_price": pl.Float64,
                "release_date": pl.Utf8,
                "rym_user_rating": pl.Float64,
                "rym_own_rating": pl.Float64,
            }
        )

    try:
        raw = pl.read_csv(
            io.BytesIO(body.encode("utf-8")),
            separator=delimiter,
            infer_schema_length=0,
            truncate_ragged_lines=True,
        )
    except pl.exceptions.PolarsError as e:
        raise RecordFormatError(f"collection text is not readable: {e}") from e
    stripped = [c.strip() for c in raw.columns]
    duplicated = sorted({c for c in stripped if stripped.count(c) > 1})
    if duplicated:
        raise RecordFormatError(f"collection header repeats column(s): {duplicated}")
    raw = raw.rename(dict(zip(raw.columns, stripped)))

    missing = [c for c in REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise RecordFormatError(f"collection header is missing required column(s): {missing}")

    fill = [pl.lit(None, dtype=pl.Utf8).alias(c) for c in OPTIONAL_COLUMNS if c not in raw.columns]
    if fill:
        raw = raw.with_columns(fill)

    return raw.select(
        pl.col("album").fill_null(""),
        _price_expr("current_price"),
        pl.col("release_date").str.strip_chars(),
        _rating_expr("rym_user_rating"),
        _rating_expr("rym_own_rating"),
    )


def parse_records(text: str, *, delimiter: str = DEFAULT_DELIMITER) -> list[AlbumRecord]:
    """Parse collection text into AlbumRecord instances preserving row order.

    Raises:
        RecordFormatError: If a mandatory column is missing from the header.
    """
    df = read_collection_frame(text, delimiter=delimiter)
    return [AlbumRecord(**row) for row in df.iter_rows(named=True)]


# ---------- Fetching ----------


def fetch_text(url: str, *, timeout: float | None = None, session: Any | None = None) -> str:
    """Fetch the collection file with a single GET.

    Args:
        url (str): HTTP(S) URL of the collection file.
        timeout (float | None): Optional request timeout in seconds.
        session: Optional requests-compatible session (anything with .get()).

    Returns:
        str: Response body decoded as text.

    Raises:
        SourceUnavailableError: On transport failures or non-2xx responses.
    """
    client = session if session is not None else requests
    logger.debug("Fetching collection from %s", url)
    try:
        resp = client.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SourceUnavailableError(f"failed to fetch {url}: {e}") from e
    return resp.text


def _is_http(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def load_albums_from_path(
    path: str | Path, *, delimiter: str = DEFAULT_DELIMITER
) -> list[AlbumRecord]:
    """Read and parse a local collection file.

    Raises:
        SourceUnavailableError: If the file does not exist or cannot be read.
        RecordFormatError: If the file is not UTF-8 or its header is unusable.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise SourceUnavailableError(f"failed to read {p}: {e}") from e
    except UnicodeDecodeError as e:
        raise RecordFormatError(f"{p} is not UTF-8 text: {e}") from e
    return parse_records(text, delimiter=delimiter)


def load_albums(
    source: str,
    *,
    settings: ChartSettings | None = None,
    session: Any | None = None,
) -> list[AlbumRecord] | None:
    """Load the collection from a URL or local path.

    Args:
        source (str): HTTP(S) URL or filesystem path.
        settings (ChartSettings | None): Supplies delimiter and request timeout.
        session: Optional requests-compatible session used for HTTP sources.

    Returns:
        list[AlbumRecord] | None: Records in file order, or None when the source is
        unreachable or its header is unusable. The failure is logged, not raised.
    """
    cfg = settings or ChartSettings()
    try:
        if _is_http(source):
            text = fetch_text(source, timeout=cfg.request_timeout, session=session)
            records = parse_records(text, delimiter=cfg.delimiter)
        else:
            records = load_albums_from_path(source, delimiter=cfg.delimiter)
    except VinylError as e:
        logger.warning("Collection unavailable: %s", e)
        return None

    logger.info("Loaded %d album(s) from %s", len(records), source)
    return records
