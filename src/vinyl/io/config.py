"""
Configuration for the vinyl loader and chart.

Defines ChartSettings, a frozen dataclass carrying the source location and chart
geometry. Defaults are sourced from vinyl.core.constants (the single source of truth).

Precedence
- environment (VINYL_*) > TOML (vinyl.toml or [tool.vinyl.chart]) > defaults.

Import DAG discipline
- Depends only on stdlib and vinyl.core.
- Does not import the viz layer or the Streamlit app.

Notes
- Malformed values in env/TOML are ignored and the lower-precedence value is kept.
- Call ChartSettings.validate() to reject values the chart cannot render.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from vinyl.core.constants import (
    BAND_PADDING,
    CHART_HEIGHT,
    CHART_WIDTH,
    DEFAULT_CURRENCY,
    DEFAULT_DELIMITER,
    DEFAULT_MAX_PRICE,
    DEFAULT_SOURCE_URL,
    RATING_MAX,
    RATING_MIN,
)
from vinyl.core.errors import ConfigError

# Keys coerced with float()/int(); everything else is taken as a string.
_FLOAT_KEYS = ("max_price", "rating_min", "rating_max", "band_padding")
_INT_KEYS = ("width", "height")


@dataclass(frozen=True)
class ChartSettings:
    """
    Runtime settings for loading the collection and drawing the chart.

    Attributes:
        source_url (str): URL (or local path) of the semicolon-delimited collection file.
        delimiter (str): Field delimiter of the collection file.
        max_price (float): Upper bound of the price axis domain (before nicing).
        currency (str): Currency label used on the price axis and in tooltips.
        rating_min (float): Lower bound of the rating axis.
        rating_max (float): Upper bound of the rating axis.
        width (int): Chart width in pixels.
        height (int): Chart height in pixels.
        band_padding (float): Padding ratio of the album band scale, in [0, 1).
        request_timeout (float | None): Timeout for the HTTP fetch; None waits indefinitely.

    Examples:
        >>> from vinyl.io.config import ChartSettings
        >>> ChartSettings(max_price=300.0)  # doctest: +ELLIPSIS
        ChartSettings(...)
    """

    source_url: str = DEFAULT_SOURCE_URL
    delimiter: str = DEFAULT_DELIMITER
    max_price: float = DEFAULT_MAX_PRICE
    currency: str = DEFAULT_CURRENCY
    rating_min: float = RATING_MIN
    rating_max: float = RATING_MAX
    width: int = CHART_WIDTH
    height: int = CHART_HEIGHT
    band_padding: float = BAND_PADDING
    request_timeout: float | None = None

    def validate(self) -> ChartSettings:
        """Return self if the settings are usable, else raise ConfigError."""
        if not self.delimiter:
            raise ConfigError("delimiter must not be empty")
        if self.max_price <= 0:
            raise ConfigError(f"max_price must be positive, got {self.max_price}")
        if self.rating_min >= self.rating_max:
            raise ConfigError(
                f"rating_min ({self.rating_min}) must be below rating_max ({self.rating_max})"
            )
        if not 0.0 <= self.band_padding < 1.0:
            raise ConfigError(f"band_padding must be in [0, 1), got {self.band_padding}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError("width and height must be positive")
        return self

    @classmethod
    def _apply_mapping(cls, base: ChartSettings, cfg: dict[str, Any] | None) -> ChartSettings:
        """Apply a loose config mapping onto ChartSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        for key in ("source_url", "delimiter", "currency"):
            if key in cfg and isinstance(cfg[key], str):
                s = replace(s, **{key: cfg[key]})

        for key in _FLOAT_KEYS:
            if key in cfg:
                try:
                    s = replace(s, **{key: float(cfg[key])})
                except (TypeError, ValueError):
                    pass

        for key in _INT_KEYS:
            if key in cfg:
                try:
                    s = replace(s, **{key: int(cfg[key])})
                except (TypeError, ValueError):
                    pass

        if "request_timeout" in cfg:
            raw = cfg["request_timeout"]
            try:
                timeout = float(raw)
                s = replace(s, request_timeout=timeout if timeout > 0 else None)
            except (TypeError, ValueError):
                pass

        return s

    @classmethod
    def from_env(cls, base: ChartSettings | None = None, prefix: str = "VINYL_") -> ChartSettings:
        """
        Build ChartSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - VINYL_SOURCE_URL
            - VINYL_DELIMITER
            - VINYL_MAX_PRICE
            - VINYL_CURRENCY
            - VINYL_RATING_MIN / VINYL_RATING_MAX
            - VINYL_WIDTH / VINYL_HEIGHT
            - VINYL_BAND_PADDING
            - VINYL_REQUEST_TIMEOUT (seconds; 0 disables)
        """
        s = base or cls()
        keys = (
            "source_url",
            "delimiter",
            "currency",
            *_FLOAT_KEYS,
            *_INT_KEYS,
            "request_timeout",
        )
        mapping: dict[str, Any] = {}
        for key in keys:
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> ChartSettings:
        """
        Build ChartSettings from a TOML file.

        Search order when `path` is None:
            1) ./vinyl.toml (with either a [chart] table or direct keys)
            2) ./pyproject.toml under [tool.vinyl.chart]

        Returns defaults if no file is present or none parses.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "vinyl.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("vinyl", {}).get("chart", {}) if isinstance(tool, dict) else None
            elif "chart" in data and isinstance(data["chart"], dict):
                cfg = data["chart"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> ChartSettings:
        """
        Load ChartSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (vinyl.toml, pyproject.toml).

        Returns:
            ChartSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
