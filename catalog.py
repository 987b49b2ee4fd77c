"""Catalog loading: fetch the publications CSV and decode it into records."""

from __future__ import annotations

import logging
import os
from dataclasses import fields
from pathlib import Path

import requests

from models import Publication, get_year_from_date

CATALOG_SOURCE = os.getenv("NASA_CATALOG_SOURCE", "data/nasa_enhanced_data.csv")
_timeout_raw = os.getenv("CATALOG_TIMEOUT_SECONDS")
REQUEST_TIMEOUT_SECONDS = float(_timeout_raw) if _timeout_raw else None

LOGGER = logging.getLogger(__name__)

# Positional binding of catalog columns to Publication fields.
CATALOG_FIELDS: list[str] = [f.name for f in fields(Publication)]

__all__ = [
    "CATALOG_FIELDS",
    "get_publication",
    "get_year_from_date",
    "load_catalog",
    "parse_catalog",
    "split_line",
]


def load_catalog(source: str | None = None) -> list[Publication]:
    """Fetch and decode the catalog, re-reading the source on every call.

    Any fetch or decode failure is logged and yields an empty catalog so the
    rest of the application keeps working with zero records.
    """
    source = source or CATALOG_SOURCE
    try:
        text = _read_source(source)
        publications = parse_catalog(text)
    except Exception:
        LOGGER.exception("Catalog load failed for source=%s", source)
        return []

    LOGGER.info("Loaded %s publications from %s", len(publications), source)
    return publications


def _read_source(source: str) -> str:
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.text
    return Path(source).read_text(encoding="utf-8")


def parse_catalog(text: str) -> list[Publication]:
    """Decode catalog text into publications, preserving line order.

    The header row only determines the expected field count. Rows with fewer
    fields than the header are dropped.
    """
    lines = text.split("\n")
    expected = len(lines[0].split(","))

    publications: list[Publication] = []
    dropped = 0
    for line_no, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue

        values = split_line(line)
        if len(values) < expected:
            dropped += 1
            LOGGER.debug(
                "Dropping catalog line %s: %s fields, expected %s",
                line_no,
                len(values),
                expected,
            )
            continue

        publications.append(_to_publication(values))

    if dropped:
        LOGGER.info("Dropped %s malformed catalog rows", dropped)
    return publications


def split_line(line: str) -> list[str]:
    """Split one CSV line into fields.

    A double quote only toggles quoted mode and is never kept, so a doubled
    quote inside a field does not produce a literal quote character.
    """
    values: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(char)

    values.append("".join(current))
    return values


def _to_publication(values: list[str]) -> Publication:
    padded = values[: len(CATALOG_FIELDS)]
    padded += [""] * (len(CATALOG_FIELDS) - len(padded))
    return Publication(**dict(zip(CATALOG_FIELDS, padded)))


def get_publication(catalog: list[Publication], index: int) -> Publication | None:
    """Address a publication by its position in the catalog."""
    if 0 <= index < len(catalog):
        return catalog[index]
    return None
