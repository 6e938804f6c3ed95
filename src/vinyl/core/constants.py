"""
Chart defaults for the vinyl rating chart.

ChartSettings in vinyl.io.config takes its defaults from here; the chart layer
reads the colours and tick positions directly.

Notes:
    - Ratings are on the RateYourMusic 0-5 scale; the chart shows 2-5 only.
    - Prices are in the collection's currency (PLN by default).
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_SOURCE_URL",
    "DEFAULT_DELIMITER",
    "DEFAULT_MAX_PRICE",
    "DEFAULT_CURRENCY",
    "RATING_MIN",
    "RATING_MAX",
    "RATING_TICKS",
    "RATING_GRID_TICKS",
    "PRICE_TICK_COUNT",
    "BAND_PADDING",
    "BAND_ALIGN",
    "CHART_WIDTH",
    "CHART_HEIGHT",
    "POINT_SIZE",
    "USER_RATING_COLOR",
    "OWN_RATING_COLOR",
    "PRICE_AREA_COLOR",
    "CONNECTOR_COLOR",
    "DATE_FORMAT",
    "REQUIRED_COLUMNS",
    "OPTIONAL_COLUMNS",
]

DEFAULT_SOURCE_URL: str = "http://localhost:3000/albums.csv"
DEFAULT_DELIMITER: str = ";"

# Upper bound of the right-hand price axis.
DEFAULT_MAX_PRICE: float = 250.0
DEFAULT_CURRENCY: str = "PLN"

RATING_MIN: float = 2.0
RATING_MAX: float = 5.0
RATING_TICKS: tuple[float, ...] = (2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0)
# Inner ticks only; the outer ones coincide with the chart edges.
RATING_GRID_TICKS: tuple[float, ...] = (2.5, 3.0, 3.5, 4.0, 4.5)
PRICE_TICK_COUNT: int = 5

BAND_PADDING: float = 0.8
BAND_ALIGN: float = 0.5

CHART_WIDTH: int = 1280
CHART_HEIGHT: int = 680

# Vega-Lite size is an area in px^2; radius 8 -> ~200.
POINT_SIZE: int = 200

USER_RATING_COLOR: str = "#3D348B"
OWN_RATING_COLOR: str = "#E6AF2E"
PRICE_AREA_COLOR: str = "#499647"
CONNECTOR_COLOR: str = "gray"

DATE_FORMAT: str = "%Y-%m-%d"

REQUIRED_COLUMNS: tuple[str, ...] = ("album", "rym_user_rating", "rym_own_rating")
OPTIONAL_COLUMNS: tuple[str, ...] = ("current_price", "release_date")
