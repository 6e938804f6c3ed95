from __future__ import annotations

import math
from datetime import date

import pydantic
import pytest

from vinyl.core.errors import ConfigError, RecordFormatError, SourceUnavailableError, VinylError
from vinyl.core.records import AlbumRecord, is_present


def test_missing_numeric_fields_default_to_nan() -> None:
    r = AlbumRecord(album="Bitches Brew", rym_user_rating=None, rym_own_rating=4.0)
    assert math.isnan(r.rym_user_rating)
    assert math.isnan(r.current_price)
    assert r.release_date is None
    assert not r.has_user_rating
    assert r.has_own_rating
    assert not r.has_price


def test_blank_release_date_becomes_none() -> None:
    r = AlbumRecord(album="A", release_date="   ")
    assert r.release_date is None
    assert r.release_day() is None


def test_release_day_parses_iso_date_and_tolerates_garbage() -> None:
    ok = AlbumRecord(album="A", release_date="1959-08-17")
    bad = AlbumRecord(album="B", release_date="August 1959")
    assert ok.release_day() == date(1959, 8, 17)
    assert bad.release_day() is None
    # Original text is kept verbatim
    assert bad.release_date == "August 1959"


def test_records_are_frozen() -> None:
    r = AlbumRecord(album="A", rym_user_rating=3.5)
    with pytest.raises(pydantic.ValidationError):
        r.rym_user_rating = 4.0  # type: ignore[misc]


def test_is_present_treats_none_and_nan_as_absent() -> None:
    assert is_present(0.0)
    assert is_present(4.5)
    assert not is_present(float("nan"))
    assert not is_present(None)


def test_error_hierarchy() -> None:
    for exc in (ConfigError, RecordFormatError, SourceUnavailableError):
        assert issubclass(exc, VinylError)
    assert issubclass(RecordFormatError, ValueError)
    assert issubclass(ConfigError, ValueError)
