"""Keyword retrieval: pick catalog records for a question and render the context block."""

from __future__ import annotations

import re

from models import Publication

MAX_CONTEXT_PUBLICATIONS = 3

NO_MATCH_CONTEXT = (
    "No specific publications found in database. Use general NASA space research knowledge."
)
CONTEXT_HEADER = "Relevant publications from NASA database:"

_SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")

_MISSION_CUES: tuple[str, ...] = ("day", "mission", "aboard")
_FINDING_CUES: tuple[str, ...] = (
    "heart",
    "blood",
    "pressure",
    "eat",
    "sleep",
    "train",
    "food",
    "measure",
    "behavior",
)


def select_publications(
    query: str,
    catalog: list[Publication],
    limit: int = MAX_CONTEXT_PUBLICATIONS,
) -> list[Publication]:
    """Return the first `limit` records whose title, abstract, keywords or topics contain the query.

    Matching is case-insensitive substring containment; results keep catalog order.
    """
    if not query:
        return []

    needle = query.lower()
    selected: list[Publication] = []
    for pub in catalog:
        if (
            needle in pub.title.lower()
            or needle in pub.abstract.lower()
            or needle in pub.keywords.lower()
            or needle in pub.topics.lower()
        ):
            selected.append(pub)
            if len(selected) >= limit:
                break
    return selected


def format_abstract(abstract: str) -> str:
    """Restructure an abstract into Title / Mission / Findings / Outcome sections.

    Every sentence is checked for cues. A mission cue makes the sentence the
    mission line (the last one wins); otherwise a physiology or method cue adds
    it to the findings. The final sentence is always the outcome, verbatim.
    """
    sentences = _SENTENCE_SPLIT.split(abstract.strip())
    title = sentences[0].replace("*", "").strip() or "Untitled Study"
    outcome = sentences[-1]

    mission = ""
    findings: list[str] = []
    for sentence in sentences:
        lower = sentence.lower()
        if any(cue in lower for cue in _MISSION_CUES):
            mission = sentence.strip()
        elif any(cue in lower for cue in _FINDING_CUES):
            findings.append(sentence.strip())

    sections = [f"Title:\n{title}"]
    if mission:
        sections.append(f"Mission:\n{mission}")
    if findings:
        sections.append("Findings:\n- " + "\n- ".join(findings))
    sections.append(f"Outcome:\n{outcome}")
    return "\n\n".join(sections).rstrip()


def truncate_abstract(text: str, limit: int = 200) -> str:
    """Hard character cut with an ellipsis."""
    return text[:limit] + "..." if len(text) > limit else text


def render_publication(publication: Publication, ordinal: int) -> str:
    return (
        f"{ordinal}. Title: {publication.title}\n"
        f"   Journal: {publication.journal}\n"
        f"   Year: {publication.year}\n"
        f"   Abstract:\n{format_abstract(publication.abstract)}\n"
        f"   Keywords: {publication.keywords}"
    )


def build_context(query: str, catalog: list[Publication]) -> str:
    """Render the context block spliced into the generation prompt."""
    selected = select_publications(query, catalog)
    if not selected:
        return NO_MATCH_CONTEXT

    blocks = [render_publication(pub, idx) for idx, pub in enumerate(selected, start=1)]
    return CONTEXT_HEADER + "\n\n" + "\n\n".join(blocks)
