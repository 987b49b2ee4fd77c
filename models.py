"""Shared typed models for the catalog explorer."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_FOUR_DIGIT_YEAR = re.compile(r"\b\d{4}\b")


class Persona(str, Enum):
    """Audience mode selected once per session."""

    ADVENTURER = "adventurer"
    EXPLORER = "explorer"
    SCIENTIST = "scientist"


@dataclass(frozen=True, slots=True)
class Publication:
    """One row of the NASA publications catalog.

    Field order matches the column order of the catalog file.
    """

    title: str = ""
    url: str = ""
    authors: str = ""
    journal: str = ""
    date: str = ""
    abstract: str = ""
    main_content: str = ""
    full_content: str = ""
    content_length: str = ""
    topics: str = ""
    keywords: str = ""
    entities: str = ""
    timeline_date: str = ""
    timeline_year: str = ""
    timeline_components: str = ""
    domain: str = ""
    source: str = ""
    scraped_date: str = ""
    status: str = ""

    @property
    def year(self) -> str:
        if self.timeline_year:
            return self.timeline_year
        match = _FOUR_DIGIT_YEAR.search(self.date)
        return match.group(0) if match else ""


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: str
    content: str


@dataclass(frozen=True, slots=True)
class TimelineEvent:
    title: str
    description: str
    year: str


def get_year_from_date(date: str) -> str:
    """Return the last space-separated token of a catalog date string."""
    return date.split(" ")[-1] if date else ""
