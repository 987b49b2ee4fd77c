from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

import catalog
from catalog import CATALOG_FIELDS, get_publication, get_year_from_date, load_catalog, parse_catalog, split_line
from models import Publication

HEADER = ",".join(CATALOG_FIELDS)


def _row(title: str, abstract: str = "An abstract.", **overrides: str) -> str:
    values = {name: "" for name in CATALOG_FIELDS}
    values.update(title=title, abstract=abstract, **overrides)
    return ",".join(f'"{values[name]}"' for name in CATALOG_FIELDS)


def test_parse_catalog_returns_rows_in_order() -> None:
    text = "\n".join([HEADER, _row("First"), _row("Second"), _row("Third")])

    pubs = parse_catalog(text)

    assert [p.title for p in pubs] == ["First", "Second", "Third"]


def test_parse_catalog_binds_fields_by_position() -> None:
    text = "\n".join([
        HEADER,
        _row("Bone Loss", journal="NPJ Microgravity", topics="biology", timeline_year="2020", status="ok"),
    ])

    pub = parse_catalog(text)[0]

    assert pub.journal == "NPJ Microgravity"
    assert pub.topics == "biology"
    assert pub.timeline_year == "2020"
    assert pub.status == "ok"


def test_short_row_is_dropped() -> None:
    assert parse_catalog("h1,h2,h3\na,b") == []


def test_row_with_header_width_defaults_missing_schema_fields() -> None:
    pubs = parse_catalog("h1,h2,h3\nTitle,http://x,Someone")

    assert len(pubs) == 1
    assert pubs[0].title == "Title"
    assert pubs[0].url == "http://x"
    assert pubs[0].authors == "Someone"
    assert pubs[0].journal == ""
    assert pubs[0].status == ""


def test_extra_fields_beyond_schema_are_ignored() -> None:
    values = [str(i) for i in range(len(CATALOG_FIELDS) + 3)]
    pubs = parse_catalog("h\n" + ",".join(values))

    assert pubs[0].title == "0"
    assert pubs[0].status == str(len(CATALOG_FIELDS) - 1)


def test_blank_lines_are_skipped() -> None:
    text = "\n".join(["a,b", "x,y", "", "   ", "z,w", ""])

    pubs = parse_catalog(text)

    assert [p.title for p in pubs] == ["x", "z"]


def test_malformed_row_between_good_rows_is_dropped() -> None:
    text = "\n".join(["a,b,c", "1,2,3", "only-one", "4,5,6"])

    assert [p.title for p in parse_catalog(text)] == ["1", "4"]


def test_split_line_keeps_quoted_comma_as_content() -> None:
    assert split_line('"a,b",c') == ["a,b", "c"]


def test_split_line_doubled_quote_is_not_an_escape() -> None:
    # Toggle off then on again: no literal quote is produced.
    assert split_line('"say ""hi"", ok",x') == ["say hi, ok", "x"]


def test_split_line_trailing_comma_yields_empty_field() -> None:
    assert split_line("a,b,") == ["a", "b", ""]


def test_load_catalog_reads_local_file(tmp_path: Path) -> None:
    path = tmp_path / "catalog.csv"
    path.write_text("\n".join([HEADER, _row("Local")]), encoding="utf-8")

    pubs = load_catalog(str(path))

    assert [p.title for p in pubs] == ["Local"]


def test_load_catalog_fetches_url() -> None:
    mock_resp = MagicMock()
    mock_resp.text = "\n".join([HEADER, _row("Remote")])

    with patch("catalog.requests.get", return_value=mock_resp) as mock_get:
        pubs = load_catalog("https://example.org/data/nasa.csv")

    assert [p.title for p in pubs] == ["Remote"]
    mock_get.assert_called_once()
    mock_resp.raise_for_status.assert_called_once()


def test_load_catalog_returns_empty_on_http_error(caplog: pytest.LogCaptureFixture) -> None:
    mock_resp = MagicMock()
    mock_resp.raise_for_status.side_effect = requests.HTTPError("404")

    with caplog.at_level(logging.ERROR, logger="catalog"), \
         patch("catalog.requests.get", return_value=mock_resp):
        assert load_catalog("https://example.org/missing.csv") == []

    errors = [r for r in caplog.records if r.name == "catalog" and r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "https://example.org/missing.csv" in errors[0].getMessage()
    assert errors[0].exc_info is not None


def test_load_catalog_returns_empty_on_missing_file(tmp_path: Path) -> None:
    assert load_catalog(str(tmp_path / "nope.csv")) == []


def test_load_catalog_uses_default_source(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "default.csv"
    path.write_text("\n".join([HEADER, _row("Default")]), encoding="utf-8")
    monkeypatch.setattr(catalog, "CATALOG_SOURCE", str(path))

    assert [p.title for p in load_catalog()] == ["Default"]


def test_load_catalog_rereads_source_each_call(tmp_path: Path) -> None:
    path = tmp_path / "catalog.csv"
    path.write_text("\n".join([HEADER, _row("One")]), encoding="utf-8")
    first = load_catalog(str(path))

    path.write_text("\n".join([HEADER, _row("One"), _row("Two")]), encoding="utf-8")
    second = load_catalog(str(path))

    assert len(first) == 1
    assert len(second) == 2


def test_get_publication_by_position() -> None:
    pubs = [Publication(title="a"), Publication(title="b")]

    assert get_publication(pubs, 1).title == "b"
    assert get_publication(pubs, 2) is None
    assert get_publication(pubs, -1) is None


@pytest.mark.parametrize("date,year", [
    ("2014 Aug 18", "18"),
    ("Mar 2019", "2019"),
    ("2021", "2021"),
    ("", ""),
])
def test_get_year_from_date_takes_last_token(date: str, year: str) -> None:
    assert get_year_from_date(date) == year


def test_publication_year_prefers_timeline_year() -> None:
    assert Publication(date="Jan 2001", timeline_year="2002").year == "2002"
    assert Publication(date="Jan 2001").year == "2001"
    assert Publication(date="2014 Aug 18").year == "2014"
    assert Publication(date="Aug 18").year == ""


def test_bundled_sample_catalog_loads() -> None:
    path = Path(__file__).resolve().parent.parent / "data" / "nasa_enhanced_data.csv"

    pubs = load_catalog(str(path))

    assert len(pubs) == 3
    assert pubs[0].journal == "PLoS One"
    assert pubs[0].timeline_year == "2014"
    # Doubled quotes are dropped, not unescaped.
    assert pubs[0].timeline_components == "{year: 2014, month: 8, day: 18}"
