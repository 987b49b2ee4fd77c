"""CLI entrypoint for the NASA research catalog explorer."""

from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from catalog import get_publication, load_catalog
from chat import ChatBusyError, ChatSession, format_response
from filters import build_timeline, extract_categories, extract_tags, list_entities, search_catalog
from llm_client import enhance_content, summarize
from models import Persona
from preferences import Preferences, load_preferences, save_persona
from prompts import CHAT_TITLES, DETAIL_HEADINGS, SEARCH_GREETINGS

_PERSONA_CHOICES = [p.value for p in Persona]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Browse NASA research publications and chat about them")
    parser.add_argument("--catalog", default=None, help="Catalog CSV path or URL (default: NASA_CATALOG_SOURCE)")
    parser.add_argument(
        "--persona",
        choices=_PERSONA_CHOICES,
        default=None,
        help="Audience mode for this run (default: saved preference)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="List publications matching a query and facets")
    search.add_argument("query", nargs="?", default="")
    search.add_argument("--year", default=None)
    search.add_argument("--tag", default=None)
    search.add_argument("--category", default=None)

    show = sub.add_parser("show", help="Show one publication by catalog index")
    show.add_argument("index", type=int)
    show.add_argument("--enhance", action="store_true", help="Rewrite the abstract for the persona")
    show.add_argument("--summary", action="store_true", help="Print a short persona summary of the abstract")

    chat = sub.add_parser("chat", help="Ask questions about the catalog")
    chat.add_argument("--question", default=None, help="Ask one question and exit")

    persona = sub.add_parser("persona", help="Show or save the persona preference")
    persona.add_argument("name", nargs="?", choices=_PERSONA_CHOICES, default=None)

    return parser.parse_args(argv)


def run_search(args: argparse.Namespace, persona: Persona) -> int:
    catalog = load_catalog(args.catalog)
    matches = search_catalog(
        catalog,
        query=args.query,
        year=args.year,
        tag=args.tag,
        category=args.category,
    )
    print(SEARCH_GREETINGS[persona])
    # Positions refer to the unfiltered catalog so `show` can address them.
    positions = {id(pub): idx for idx, pub in enumerate(catalog)}
    for pub in matches:
        print(f"[{positions[id(pub)]}] {pub.title} ({pub.journal}, {pub.year})")
    logging.info("Search matched %s of %s publications", len(matches), len(catalog))
    return 0


def run_show(args: argparse.Namespace, persona: Persona) -> int:
    catalog = load_catalog(args.catalog)
    pub = get_publication(catalog, args.index)
    if pub is None:
        logging.error("No publication at index %s (catalog size %s)", args.index, len(catalog))
        return 1

    abstract = enhance_content(pub.abstract, persona) if args.enhance else pub.abstract
    print(DETAIL_HEADINGS[persona])
    print(pub.title)
    print(f"{pub.authors} | {pub.journal} | {pub.date}")
    print(f"Year: {pub.year}")
    print(pub.url)
    print()
    if args.summary:
        print("Summary: " + summarize(pub.abstract, persona))
        print()
    print(abstract)
    print()
    print("Tags: " + ", ".join(extract_tags(pub)))
    print("Categories: " + ", ".join(extract_categories(pub)))
    print("Entities: " + ", ".join(list_entities(pub)))
    print()
    print("Timeline:")
    for event in build_timeline(pub):
        print(f"  {event.year}  {event.title}: {event.description}")
    return 0


def run_chat(args: argparse.Namespace, prefs: Preferences) -> int:
    catalog = load_catalog(args.catalog)
    session = ChatSession(catalog, persona=prefs.persona)

    if args.question:
        reply = session.submit(args.question)
        if reply is not None:
            print("\n\n".join(format_response(reply.content)))
        return 0

    if not prefs.has_seen_welcome:
        print(SEARCH_GREETINGS[prefs.persona])
        prefs.has_seen_welcome = True
    print(CHAT_TITLES[prefs.persona])
    print("\n\n".join(format_response(session.transcript[0].content)))

    while True:
        try:
            question = input(f"{session.placeholder} > ")
        except EOFError:
            break
        if not question.strip():
            break
        try:
            reply = session.submit(question)
        except ChatBusyError as exc:
            logging.warning("%s", exc)
            continue
        if reply is not None:
            print("\n\n".join(format_response(reply.content)))
    return 0


def run_persona(args: argparse.Namespace, prefs: Preferences) -> int:
    if args.name:
        save_persona(Persona(args.name))
        print(args.name)
    else:
        print(prefs.persona.value)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Initialize config and dispatch the selected command."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = parse_args(argv)

    prefs = load_preferences()
    if args.persona:
        prefs.persona = Persona(args.persona)

    if args.command == "search":
        return run_search(args, prefs.persona)
    if args.command == "show":
        return run_show(args, prefs.persona)
    if args.command == "chat":
        return run_chat(args, prefs)
    return run_persona(args, prefs)


if __name__ == "__main__":
    raise SystemExit(main())
