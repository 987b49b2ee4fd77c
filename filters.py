"""Keyword-cue tagging and browse filters for the catalog (no LLM calls)."""

from __future__ import annotations

import json
import logging
from json import JSONDecodeError

from models import Publication, TimelineEvent, get_year_from_date

LOGGER = logging.getLogger(__name__)

# (label, cue tokens) checked against the lowercased keywords field.
_TAG_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Microgravity", ("microgravity", "gravity")),
    ("Bone Health", ("bone", "skeletal")),
    ("Muscle", ("muscle",)),
    ("Immune System", ("immune",)),
    ("Cardiovascular", ("cardiovascular", "heart")),
    ("Radiation", ("radiation",)),
    ("Stem Cells", ("stem cell",)),
    ("Cancer", ("cancer",)),
    ("Regeneration", ("regeneration",)),
    ("Genetics", ("gene", "genetic")),
    ("Space Research", ("space",)),
    ("Biology", ("biology", "biological")),
    ("Molecular", ("molecular",)),
    ("Cellular", ("cellular",)),
    ("Experimental", ("experiment",)),
)

# Category rules: "content" cues look at abstract + keywords + topics,
# "topics" cues look at the topics field alone.
_CATEGORY_RULES: tuple[tuple[str, tuple[str, ...], tuple[str, ...]], ...] = (
    ("Animal Studies", ("mouse", "mice", "rodent"), ()),
    ("Human Research", ("human", "astronaut"), ()),
    ("Cellular & Molecular", ("cell",), ("cellular", "molecular")),
    ("Tissue & Organ", ("tissue", "organ"), ()),
    ("Space Mission", ("biosatellite", "space station", "shuttle", "mission"), ()),
    ("Biology", (), ("biology", "biological")),
    ("Technology", (), ("technology", "experiment")),
    ("Research", (), ("research",)),
)


def extract_tags(publication: Publication) -> list[str]:
    """Return research-theme tags derived from the keywords field."""
    keywords = publication.keywords.lower()
    return [label for label, cues in _TAG_RULES if any(cue in keywords for cue in cues)]


def extract_categories(publication: Publication) -> list[str]:
    """Return broad study categories for a publication."""
    content = f"{publication.abstract} {publication.keywords} {publication.topics}".lower()
    topics = publication.topics.lower()

    categories: list[str] = []
    for label, content_cues, topic_cues in _CATEGORY_RULES:
        if any(cue in content for cue in content_cues) or any(cue in topics for cue in topic_cues):
            categories.append(label)
    return categories


def search_catalog(
    catalog: list[Publication],
    query: str = "",
    year: str | None = None,
    tag: str | None = None,
    category: str | None = None,
) -> list[Publication]:
    """Browse filter: every supplied criterion must hold.

    Returns a new list; the catalog itself is never reordered or mutated, so
    positions in it stay valid.
    """
    filtered = list(catalog)

    if query:
        needle = query.lower()
        filtered = [
            pub
            for pub in filtered
            if needle in pub.title.lower()
            or needle in pub.abstract.lower()
            or needle in pub.keywords.lower()
        ]

    if year:
        filtered = [pub for pub in filtered if get_year_from_date(pub.date) == year]

    if tag:
        filtered = [pub for pub in filtered if tag in extract_tags(pub)]

    if category:
        filtered = [pub for pub in filtered if category in extract_categories(pub)]

    return filtered


def available_tags(catalog: list[Publication]) -> list[str]:
    return _unique(tag for pub in catalog for tag in extract_tags(pub))


def available_categories(catalog: list[Publication]) -> list[str]:
    return _unique(cat for pub in catalog for cat in extract_categories(pub))


def available_years(catalog: list[Publication]) -> list[str]:
    """Distinct numeric publication years, newest first."""
    years = _unique(get_year_from_date(pub.date) for pub in catalog)
    return sorted((y for y in years if y.isdigit()), key=int, reverse=True)


def list_entities(publication: Publication, limit: int = 5) -> list[str]:
    """Named entities from the semicolon-separated entities field."""
    entities = [e.strip() for e in publication.entities.split(";")]
    return [e for e in entities if e][:limit]


def build_timeline(publication: Publication) -> list[TimelineEvent]:
    """Timeline events for the detail view.

    Uses the JSON `timeline_components` field ({"year", "month", "day"}) when it
    decodes to an object, otherwise falls back to the raw date and timeline year.
    """
    excerpt = publication.abstract[:100] + "..."

    components = _parse_timeline_components(publication)
    if components is not None:
        year = str(components.get("year", ""))
        month = components.get("month", "")
        day = components.get("day", "")
        return [
            TimelineEvent("Publication Date", f"Published {month}/{day}/{year}", year),
            TimelineEvent("Study Period", f"Research conducted in {year}", year),
            TimelineEvent("Data Collection", excerpt, year),
        ]

    return [
        TimelineEvent("Publication", f"Published on {publication.date}", publication.timeline_year),
        TimelineEvent("Research Phase", excerpt, publication.timeline_year),
    ]


def _parse_timeline_components(publication: Publication) -> dict | None:
    if not publication.timeline_components:
        return None
    try:
        parsed = json.loads(publication.timeline_components)
    except JSONDecodeError as exc:
        LOGGER.warning("Unparseable timeline_components for %r: %s", publication.title, exc)
        return None
    return parsed if isinstance(parsed, dict) else None


def _unique(values) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return list(seen)
