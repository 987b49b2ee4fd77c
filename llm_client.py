"""HTTP client for the text-generation endpoint (Ollama-style /api/generate)."""

from __future__ import annotations

import logging
import os
from typing import Any

import requests

from models import Persona
from prompts import enhance_prompt, summary_prompt
from retrieval import truncate_abstract

LLM_API_URL = os.getenv(
    "LLM_API_URL",
    "https://birefringent-cerebrational-ian.ngrok-free.dev/api/generate",
)
LLM_MODEL = os.getenv("LLM_MODEL", "llama3.2-vision:11b")
_timeout_raw = os.getenv("LLM_TIMEOUT_SECONDS")
REQUEST_TIMEOUT_SECONDS = float(_timeout_raw) if _timeout_raw else None

ENHANCE_MAX_TOKENS = 500
SUMMARY_MAX_TOKENS = 200
REWRITE_TEMPERATURE = 0.7

LOGGER = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """The endpoint answered but no generated text could be found."""


def generate(
    prompt: str,
    *,
    max_tokens: int | None = None,
    temperature: float | None = None,
) -> str:
    """Send one non-streaming generation request and return the reply text.

    Raises requests.HTTPError on a non-2xx status and GenerationError when the
    body carries no generated text. There is no retry.
    """
    payload: dict[str, Any] = {
        "model": LLM_MODEL,
        "prompt": prompt,
        "stream": False,
    }
    if max_tokens is not None:
        payload["max_tokens"] = max_tokens
    if temperature is not None:
        payload["temperature"] = temperature

    LOGGER.debug("Calling generation endpoint model=%s prompt_chars=%s", LLM_MODEL, len(prompt))
    response = requests.post(
        LLM_API_URL,
        headers={"Content-Type": "application/json"},
        json=payload,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    response.raise_for_status()

    text = extract_generated_text(response.json())
    if text is None:
        raise GenerationError("Generation endpoint returned no text")
    return text


def extract_generated_text(body: Any) -> str | None:
    """Return the first populated text field among the known response shapes.

    Checked in order: `response` (Ollama), `choices[0].text` (completions),
    `content`, `message`.
    """
    if not isinstance(body, dict):
        return None

    candidates: list[Any] = [body.get("response")]
    choices = body.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        candidates.append(choices[0].get("text"))
    else:
        candidates.append(None)
    candidates.append(body.get("content"))
    candidates.append(body.get("message"))

    for value in candidates:
        if isinstance(value, str) and value:
            return value
    return None


def enhance_content(content: str, persona: Persona) -> str:
    """Rewrite publication text for the persona; falls back to the original text."""
    try:
        return generate(
            enhance_prompt(content, persona),
            max_tokens=ENHANCE_MAX_TOKENS,
            temperature=REWRITE_TEMPERATURE,
        )
    except Exception as exc:
        LOGGER.warning("Content enhancement failed for persona=%s: %s", persona.value, exc)
        return content


def summarize(content: str, persona: Persona) -> str:
    """Short persona-specific summary; falls back to a truncated excerpt."""
    try:
        summary = generate(
            summary_prompt(content, persona),
            max_tokens=SUMMARY_MAX_TOKENS,
            temperature=REWRITE_TEMPERATURE,
        )
    except Exception as exc:
        LOGGER.warning("Summary generation failed for persona=%s: %s", persona.value, exc)
        return truncate_abstract(content)
    return summary or truncate_abstract(content)
