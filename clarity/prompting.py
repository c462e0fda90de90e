"""Prompt building for the turning-of-the-year reading."""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Optional, Tuple

from pydantic.alias_generators import to_camel

from .models import CARD_SLOTS, MysticalCard, PersonalityProfile

TEMPLATE_KEY = "turning_of_year_reading"

SYSTEM_PROMPT = (
    "You are a wise, empathetic spiritual guide providing personalized insights "
    "based on personality psychology and tarot-inspired wisdom."
)

DEFAULT_PROMPT_TEMPLATE = """You are giving a tarot-style reading for the turning of the year.
Tone: symbolic, warm, intuitive, lightly playful.
Not predictive. Not clinical. No "you should." No diagnosis.

Use the card names as archetypes and speak as if the cards are revealing patterns.

Here is the spread:
1. The Burden: {{burdenCard}}
2. The Leak: {{leakCard}}
3. The Survival Skill: {{survivalSkillCard}}
4. The Shadow Cost: {{shadowCostCard}}
5. The Missing Medicine: {{missingMedicineCard}}
6. The Way Help Works: {{helpWorksCard}}
7. The Boundary Spell: {{boundarySpellCard}}
8. The North Star: {{northStarCard}}
9. The First Gate: {{firstGateCard}}
10. The Emerging Archetype: {{emergingArchetypeCard}}

The seeker has drawn "{{cardName}}" ({{cardElement}} element - symbolizing {{cardMeaning}}).

{{personalityDesc}}

{{contextDesc}}

TASK:
Create TWO sections.

SECTION I — The Reading
- 3–4 paragraphs telling the story of the year:
  - what weighed on them
  - how they adapted
  - why it makes sense
- Then describe next year as a rebalancing, not a reinvention.

SECTION II — The Path Opens
List 3–5 types of supportive next steps (not specific businesses), such as:
- "A beginner-friendly gym or movement practice with consistent times"
- "Low-pressure, activity-based dating or social spaces"
- "Weekly class or group with a stable cohort"
- "Routine-building spaces like studios, coworking, or scheduled programs"

For each:
- Name which cards it supports
- Explain why it reduces friction
- Include one thing to avoid based on the Boundary Spell

Constraints:
- 600–800 words max.
- Keep the magic gentle and grounded.
- Emphasize that change comes from choosing better containers, not pushing harder.
- End with reassurance that the first gate is already open."""

UNREVEALED = "Unrevealed"
BALANCED = "balanced"

_TOKEN_RE = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")

# (label, high >70, mid >40, low)
_TRAIT_TAGS: Dict[str, Tuple[str, str, str, str]] = {
    "openness": ("Openness", "highly creative and curious", "balanced", "practical and traditional"),
    "conscientiousness": ("Conscientiousness", "organized and disciplined", "flexible", "spontaneous"),
    "extraversion": ("Extraversion", "outgoing and energetic", "balanced", "introspective"),
    "agreeableness": ("Agreeableness", "compassionate and cooperative", "balanced", "assertive"),
    "emotional_stability": ("Emotional Stability", "calm and resilient", "steady", "deeply feeling"),
}

# legacy aliases that stand in for a slot the profile left empty
_SLOT_ALIASES = {
    "burden": "year_struggles",
    "north_star": "year_wants",
}


def render_template(template: str, values: Mapping[str, str]) -> str:
    """Replace every `{{key}}` whose key is in `values`.

    Unknown tokens are left as-is. Substituted text is not scanned again.
    """
    def _sub(m: "re.Match[str]") -> str:
        key = m.group(1)
        if key in values:
            return values[key]
        return m.group(0)

    return _TOKEN_RE.sub(_sub, template)


def trait_tag(trait: str, score: int) -> str:
    _, high, mid, low = _TRAIT_TAGS[trait]
    if score > 70:
        return high
    if score > 40:
        return mid
    return low


def resolve_slot(profile: PersonalityProfile, slot: str) -> str:
    value = profile.pick(f"{slot}_card")
    if not value and slot in _SLOT_ALIASES:
        value = profile.pick(_SLOT_ALIASES[slot])
    return value or UNREVEALED


def personality_description(profile: PersonalityProfile) -> str:
    scores = {
        "openness": profile.openness,
        "conscientiousness": profile.conscientiousness,
        "extraversion": profile.extraversion,
        "agreeableness": profile.agreeableness,
        "emotional_stability": 100 - profile.neuroticism,
    }
    lines = ["Personality Traits (Big 5 OCEAN):"]
    for trait, score in scores.items():
        label = _TRAIT_TAGS[trait][0]
        lines.append(f"- {label}: {score}/100 ({trait_tag(trait, score)})")
    lines.append("")
    lines.append(f"Cognitive Style: {profile.pick('intuition_vs_sensing') or BALANCED}")
    lines.append(f"Decision Making: {profile.pick('thinking_vs_feeling') or BALANCED}")
    return "\n".join(lines)


def context_description(
    profile: PersonalityProfile,
    focus_area: Optional[str] = None,
    mood: Optional[str] = None,
) -> str:
    struggles = profile.pick("year_struggles") or profile.pick("burden_card")
    wants = profile.pick("year_wants") or profile.pick("north_star_card")

    entries = [
        ("This Year's Struggles", struggles),
        ("This Year's Desire", wants),
        ("Past", profile.pick("past_experiences")),
        ("Current Challenges", profile.pick("current_challenges")),
        ("Hopes & Dreams", profile.pick("hopes_and_dreams")),
        ("Fears & Concerns", profile.pick("fears_and_worries")),
        ("Focus Area", profile.pick("life_area")),
        ("Today's Focus", focus_area),
        ("Current Mood", mood),
    ]
    lines: List[str] = ["Life Context:"]
    lines.extend(f"{label}: {value}" for label, value in entries if value)
    return "\n".join(lines)


def prompt_values(
    profile: PersonalityProfile,
    card: MysticalCard,
    focus_area: Optional[str] = None,
    mood: Optional[str] = None,
) -> Dict[str, str]:
    values = {to_camel(f"{slot}_card"): resolve_slot(profile, slot) for slot in CARD_SLOTS}
    values.update(
        cardName=card.name,
        cardElement=card.element,
        cardMeaning=card.meaning,
        personalityDesc=personality_description(profile),
        contextDesc=context_description(profile, focus_area, mood),
    )
    return values


def build_prompt(
    template: str,
    profile: PersonalityProfile,
    card: MysticalCard,
    focus_area: Optional[str] = None,
    mood: Optional[str] = None,
) -> str:
    return render_template(template, prompt_values(profile, card, focus_area, mood))
