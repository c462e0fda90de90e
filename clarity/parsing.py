"""Turn the model's free-form reading into structured fields.

The reply is prose with loose "SECTION I/II" headings, not JSON. Nothing
here raises: every field has a fallback so a reading can always be shown.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple, Optional, Tuple

FALLBACK_INTERPRETATION = "The cards reveal a quiet story of growth and resilience."
FALLBACK_GUIDANCE = "The path opens through gentler containers and steady support."
FALLBACK_ACTION = "Choose one supportive container that makes the next step feel lighter."
FALLBACK_AFFIRMATION = "The first gate is already open; you are simply walking through."

SECTION_I_RE = re.compile(r"SECTION I[^\n]*The Reading[^\n]*\n?", re.IGNORECASE)
SECTION_II_RE = re.compile(r"SECTION II[^\n]*The Path Opens[^\n]*\n?", re.IGNORECASE)
SECTION_II_START_RE = re.compile(r"SECTION II[^\n]*The Path Opens", re.IGNORECASE)
BULLET_RE = re.compile(r"^[-*•]\s+(.*)")
LAST_SENTENCE_RE = re.compile(r"[^.!?]*[.!?](?=\s*$)")


class ParsedReading(NamedTuple):
    interpretation: str
    guidance: str
    actions: Tuple[str, ...]
    affirmation: str
    # names of the fields that used their fallback text
    fallbacks: Tuple[str, ...] = ()

    @property
    def unstructured(self) -> bool:
        return "interpretation" in self.fallbacks and "actions" in self.fallbacks


def normalize(text: Optional[str]) -> str:
    return (text or "").replace("\r\n", "\n").strip()


def extract_section(text: str, start: "re.Pattern[str]", end: Optional["re.Pattern[str]"] = None) -> str:
    m = start.search(text)
    if not m:
        return ""
    rest = text[m.end():]
    if end is None:
        return rest.strip()
    stop = end.search(rest)
    return (rest[: stop.start()] if stop else rest).strip()


def extract_bullets(section: str) -> Tuple[str, List[str]]:
    """Split a section into leading body prose and bullet items.

    Lines after an open bullet continue it; lines before the first bullet
    are body text.
    """
    body: List[str] = []
    bullets: List[str] = []
    current: Optional[str] = None

    for line in section.split("\n"):
        trimmed = line.strip()
        m = BULLET_RE.match(trimmed)
        if m:
            if current:
                bullets.append(current.strip())
            current = m.group(1).strip()
            continue
        if current and trimmed:
            current = f"{current} {trimmed}"
            continue
        if not current and trimmed:
            body.append(trimmed)

    if current:
        bullets.append(current.strip())
    return "\n".join(body).strip(), bullets


def last_sentence(text: str) -> str:
    m = LAST_SENTENCE_RE.search(text)
    return m.group(0).strip() if m else ""


def parse_reading_text(text: Optional[str]) -> ParsedReading:
    normalized = normalize(text)

    section_i = extract_section(normalized, SECTION_I_RE, SECTION_II_START_RE)
    section_ii = extract_section(normalized, SECTION_II_RE)
    body, bullets = extract_bullets(section_ii)
    affirmation = last_sentence(normalized)

    fallbacks: List[str] = []
    if not section_i:
        fallbacks.append("interpretation")
    if not body:
        fallbacks.append("guidance")
    if not bullets:
        fallbacks.append("actions")
    if not affirmation:
        fallbacks.append("affirmation")

    return ParsedReading(
        interpretation=section_i or FALLBACK_INTERPRETATION,
        guidance=body or FALLBACK_GUIDANCE,
        actions=tuple(bullets) if bullets else (FALLBACK_ACTION,),
        affirmation=affirmation or FALLBACK_AFFIRMATION,
        fallbacks=tuple(fallbacks),
    )
