"""Reading pipeline: card -> prompt -> generation -> parsed Reading.

Collaborators are passed in:
- `template_source`: anything with `get_template(key) -> Optional[str]`
- `generator`: anything with `generate(system_prompt, user_prompt) -> str`
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .ai import GenerationUnavailable
from .cards import select_card
from .models import PersonalityProfile, Reading
from .parsing import parse_reading_text
from .prompting import DEFAULT_PROMPT_TEMPLATE, SYSTEM_PROMPT, TEMPLATE_KEY, build_prompt

log = logging.getLogger("clarity.reading")


class ReadingGenerationFailed(RuntimeError):
    def __init__(self, message: str = "reading generation failed"):
        super().__init__(message)


class ReadingPipeline:
    def __init__(self, template_source: Any, generator: Any, template_key: str = TEMPLATE_KEY):
        self.template_source = template_source
        self.generator = generator
        self.template_key = template_key

    def load_template(self) -> str:
        """Stored template, or the built-in one if the store fails or has no entry."""
        try:
            template = self.template_source.get_template(self.template_key)
        except Exception as e:
            log.warning("prompt template load failed key=%s error=%s; using default", self.template_key, e)
            return DEFAULT_PROMPT_TEMPLATE
        if not template:
            log.warning("prompt template missing key=%s; using default", self.template_key)
            return DEFAULT_PROMPT_TEMPLATE
        return template

    def run(
        self,
        profile: PersonalityProfile,
        focus_area: Optional[str] = None,
        mood: Optional[str] = None,
    ) -> Reading:
        card = select_card(profile)
        prompt = build_prompt(self.load_template(), profile, card, focus_area, mood)

        try:
            text = self.generator.generate(SYSTEM_PROMPT, prompt)
        except GenerationUnavailable as e:
            log.error("reading generation failed card=%s cause=%s", card.name, e.last_error)
            raise ReadingGenerationFailed() from e

        parsed = parse_reading_text(text)
        if parsed.unstructured:
            log.warning("reply had no SECTION markers; using fallback text chars=%d", len(text or ""))

        return Reading(
            card_drawn=card.name,
            card_element=card.element,
            card_meaning=card.meaning,
            interpretation=parsed.interpretation,
            guidance_message=parsed.guidance,
            action_steps=list(parsed.actions),
            affirmation=parsed.affirmation,
        )
