"""Chat session: keyword-augmented questions forwarded to the generation endpoint."""

from __future__ import annotations

import logging
import re
import threading
from typing import Callable

from llm_client import GenerationError, generate
from models import ChatMessage, Persona, Publication
from prompts import CHAT_GREETING, CHAT_PLACEHOLDERS, build_prompt
from retrieval import build_context

LOGGER = logging.getLogger(__name__)

EMPTY_REPLY_MESSAGE = "I'm sorry, I couldn't process that request."
CONNECTION_ERROR_MESSAGE = (
    "⚠️ I’m having trouble connecting to the AI service. Please try again later."
)

_CODE_FENCE = re.compile(r"```[\s\S]*?```")
_HEADING_MARKS = re.compile(r"#+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


class ChatBusyError(RuntimeError):
    """A question was submitted while another one is still in flight."""


def format_response(text: str) -> list[str]:
    """Clean a raw reply for display and split it into paragraphs."""
    cleaned = _CODE_FENCE.sub("", text)
    cleaned = cleaned.replace("**", "")
    cleaned = _HEADING_MARKS.sub("", cleaned)
    cleaned = _EXCESS_NEWLINES.sub("\n\n", cleaned).strip()
    paragraphs = (p.strip() for p in _PARAGRAPH_BREAK.split(cleaned))
    return [p for p in paragraphs if p]


class ChatSession:
    """One client-side conversation over an in-memory catalog.

    At most one request is outstanding: submit() refuses new questions while
    busy instead of queueing them.
    """

    def __init__(
        self,
        catalog: list[Publication],
        persona: Persona = Persona.EXPLORER,
        generator: Callable[[str], str] | None = None,
    ) -> None:
        self.catalog = catalog
        self.persona = persona
        self._generator = generator or generate
        self._in_flight = threading.Lock()
        self.transcript: list[ChatMessage] = [ChatMessage("assistant", CHAT_GREETING)]

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    @property
    def placeholder(self) -> str:
        return CHAT_PLACEHOLDERS[self.persona]

    def submit(self, question: str) -> ChatMessage | None:
        """Ask one question and append the exchange to the transcript.

        Returns the assistant entry, or None when the question is blank.
        Raises ChatBusyError if a previous question has not settled yet.
        """
        question = question.strip()
        if not question:
            return None

        if not self._in_flight.acquire(blocking=False):
            raise ChatBusyError("A question is already being answered")

        try:
            self.transcript.append(ChatMessage("user", question))
            reply = self._answer(question)
            self.transcript.append(reply)
            return reply
        finally:
            self._in_flight.release()

    def _answer(self, question: str) -> ChatMessage:
        context = build_context(question, self.catalog)
        prompt = build_prompt(question, context, self.persona)
        try:
            text = self._generator(prompt)
        except GenerationError as exc:
            LOGGER.warning("Generation endpoint returned no text: %s", exc)
            text = ""
        except Exception:
            LOGGER.exception("Generation request failed")
            return ChatMessage("assistant", CONNECTION_ERROR_MESSAGE)
        return ChatMessage("assistant", text or EMPTY_REPLY_MESSAGE)
