"""Persisted user preferences (persona selection)."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from models import Persona

PREFERENCES_PATH = os.getenv("PREFERENCES_PATH", str(Path.home() / ".nasa_explorer.json"))

LOGGER = logging.getLogger(__name__)


@dataclass
class Preferences:
    persona: Persona = Persona.EXPLORER
    # Per process only; never written to disk.
    has_seen_welcome: bool = False


def load_persona(default: Persona = Persona.EXPLORER) -> Persona:
    """Return the saved persona, or `default` if none is stored or it is unreadable."""
    path = Path(PREFERENCES_PATH)
    if not path.exists():
        return default

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Persona(data["persona"])
    except (OSError, ValueError, KeyError, TypeError) as exc:
        LOGGER.warning("Ignoring unreadable preferences at %s: %s", path, exc)
        return default


def save_persona(persona: Persona) -> None:
    path = Path(PREFERENCES_PATH)
    path.write_text(json.dumps({"persona": persona.value}), encoding="utf-8")
    LOGGER.info("Saved persona=%s to %s", persona.value, path)


def load_preferences() -> Preferences:
    return Preferences(persona=load_persona())
