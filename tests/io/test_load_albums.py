from __future__ import annotations

import logging
from pathlib import Path

import pytest
import requests

from vinyl.core.errors import RecordFormatError, SourceUnavailableError
from vinyl.io.config import ChartSettings
from vinyl.io.read import fetch_text, load_albums, load_albums_from_path

CSV_TEXT = "album;current_price;rym_user_rating;rym_own_rating\nA;10,5;3.5;4\nB;20;;3.0\n"


class _FakeResponse:
    def __init__(self, text: str, status: int = 200) -> None:
        self.text = text
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.calls: list[tuple[str, float | None]] = []

    def get(self, url: str, timeout: float | None = None) -> _FakeResponse:
        self.calls.append((url, timeout))
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response


def test_fetch_text_single_get_with_timeout() -> None:
    session = _FakeSession(_FakeResponse(CSV_TEXT))
    out = fetch_text("http://x/albums.csv", timeout=3.0, session=session)
    assert out == CSV_TEXT
    assert session.calls == [("http://x/albums.csv", 3.0)]


def test_fetch_text_wraps_http_errors() -> None:
    session = _FakeSession(_FakeResponse("not found", status=404))
    with pytest.raises(SourceUnavailableError):
        fetch_text("http://x/missing.csv", session=session)


def test_fetch_text_wraps_connection_errors() -> None:
    session = _FakeSession(exc=requests.ConnectionError("refused"))
    with pytest.raises(SourceUnavailableError, match="refused"):
        fetch_text("http://x/albums.csv", session=session)


def test_load_albums_over_http() -> None:
    session = _FakeSession(_FakeResponse(CSV_TEXT))
    settings = ChartSettings(request_timeout=5.0)

    records = load_albums("http://x/albums.csv", settings=settings, session=session)

    assert records is not None
    assert [r.album for r in records] == ["A", "B"]
    assert records[0].current_price == 10.5
    assert not records[1].has_user_rating
    assert session.calls == [("http://x/albums.csv", 5.0)]


def test_load_albums_returns_none_when_unreachable(caplog) -> None:
    session = _FakeSession(exc=requests.ConnectionError("refused"))
    with caplog.at_level(logging.WARNING, logger="vinyl.io.read"):
        records = load_albums("http://x/albums.csv", session=session)
    assert records is None
    assert any("unavailable" in rec.message for rec in caplog.records)


def test_load_albums_returns_none_on_bad_header() -> None:
    session = _FakeSession(_FakeResponse("name;price\nA;1\n"))
    assert load_albums("http://x/albums.csv", session=session) is None


def test_load_albums_from_local_path(tmp_path: Path) -> None:
    p = tmp_path / "albums.csv"
    p.write_text(CSV_TEXT, encoding="utf-8")

    assert [r.album for r in load_albums_from_path(p)] == ["A", "B"]
    records = load_albums(str(p))
    assert records is not None and len(records) == 2


def test_load_albums_missing_local_file_returns_none(tmp_path: Path) -> None:
    assert load_albums(str(tmp_path / "nope.csv")) is None
    with pytest.raises(SourceUnavailableError):
        load_albums_from_path(tmp_path / "nope.csv")


def test_non_utf8_local_file_returns_none(tmp_path: Path) -> None:
    p = tmp_path / "albums.csv"
    p.write_bytes("album;rym_user_rating;rym_own_rating\nZłota płyta;3.5;4\n".encode("cp1250"))

    assert load_albums(str(p)) is None
    with pytest.raises(RecordFormatError, match="UTF-8"):
        load_albums_from_path(p)


def test_duplicate_header_after_stripping_returns_none(tmp_path: Path) -> None:
    p = tmp_path / "albums.csv"
    p.write_text("album; album;rym_user_rating;rym_own_rating\nA;A;3.5;4\n", encoding="utf-8")

    assert load_albums(str(p)) is None
