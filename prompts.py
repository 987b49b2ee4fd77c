"""Prompt templates and persona-specific copy."""

from __future__ import annotations

from models import Persona

CONTEXT_LABEL = "Context from NASA Research Database:"
QUESTION_LABEL = "User question:"

PERSONA_PREAMBLES: dict[Persona, str] = {
    Persona.ADVENTURER: (
        "You are a friendly NASA assistant for kids. "
        "Use simple words, short sentences, and add emojis."
    ),
    Persona.EXPLORER: "You are a NASA assistant. Explain clearly, engagingly, in smooth paragraphs.",
    Persona.SCIENTIST: "You are a NASA assistant. Provide structured, scientific paragraphs.",
}

FORMATTING_INSTRUCTIONS = """When summarizing publications:
- Write in clear, flowing paragraphs.
- Each abstract should be 1–2 concise paragraphs, easy to read.
- Avoid repetition, avoid markdown, avoid code blocks."""

CHAT_GREETING = (
    "Hello! I'm your NASA Research assistant. I can help you explore publications, "
    "answer questions about space research, and create clear summaries. "
    "What would you like to know?"
)

CHAT_PLACEHOLDERS: dict[Persona, str] = {
    Persona.ADVENTURER: "Ask me about cool space stuff! 🚀",
    Persona.EXPLORER: "Ask about space research...",
    Persona.SCIENTIST: "Query the research database...",
}

CHAT_TITLES: dict[Persona, str] = {
    Persona.ADVENTURER: "🤖 Space Helper",
    Persona.EXPLORER: "NASA Research Assistant",
    Persona.SCIENTIST: "NASA Research Assistant",
}

SEARCH_GREETINGS: dict[Persona, str] = {
    Persona.ADVENTURER: "Welcome, Space Adventurer! Let's explore the cosmos!",
    Persona.EXPLORER: "Welcome, Explorer. Discover fascinating space research.",
    Persona.SCIENTIST: "Welcome, Researcher. Explore detailed scientific publications.",
}

DETAIL_HEADINGS: dict[Persona, str] = {
    Persona.ADVENTURER: "🚀 Cool Space Discovery!",
    Persona.EXPLORER: "Research Discovery",
    Persona.SCIENTIST: "Scientific Publication",
}

_ENHANCE_TEMPLATES: dict[Persona, str] = {
    Persona.ADVENTURER: (
        "Rewrite this scientific content in a simple, fun, and exciting way for a young "
        "space adventurer (ages 8-14). Use simple words, short sentences, and make it "
        "engaging and inspiring. Keep it under 200 words:\n\n{content}"
    ),
    Persona.EXPLORER: (
        "Rewrite this scientific content for a space explorer with intermediate knowledge. "
        "Use clear language, explain key concepts, but maintain scientific accuracy. "
        "Keep it informative and engaging, around 250 words:\n\n{content}"
    ),
    Persona.SCIENTIST: (
        "Enhance this scientific content for a researcher. Maintain technical accuracy, "
        "expand on key findings, and include relevant scientific details. "
        "Keep professional tone, around 300 words:\n\n{content}"
    ),
}

_SUMMARY_TEMPLATES: dict[Persona, str] = {
    Persona.ADVENTURER: (
        "Create a super short, exciting summary (2-3 sentences) of this space research "
        "for kids:\n\n{content}"
    ),
    Persona.EXPLORER: (
        "Create a clear, informative summary (3-4 sentences) of this space research:\n\n{content}"
    ),
    Persona.SCIENTIST: (
        "Create a comprehensive summary highlighting key findings and methodology "
        "(4-5 sentences):\n\n{content}"
    ),
}


def build_prompt(question: str, context: str, persona: Persona) -> str:
    """Assemble the full generation prompt for one chat question."""
    return (
        f"{PERSONA_PREAMBLES[persona]}\n\n"
        f"{CONTEXT_LABEL}\n{context}\n\n"
        f"{QUESTION_LABEL} {question}\n\n"
        f"{FORMATTING_INSTRUCTIONS}"
    )


def enhance_prompt(content: str, persona: Persona) -> str:
    return _ENHANCE_TEMPLATES[persona].format(content=content)


def summary_prompt(content: str, persona: Persona) -> str:
    return _SUMMARY_TEMPLATES[persona].format(content=content)
