"""Mystical card catalog + selection.

Twelve tarot-inspired archetypes. Order matters: the fallback rule in
`select_card` indexes into the catalog.
"""

from __future__ import annotations

from typing import Tuple

from .models import MysticalCard, PersonalityProfile


class CatalogError(LookupError):
    pass


MYSTICAL_CARDS: Tuple[MysticalCard, ...] = (
    MysticalCard(name="The Seeker", element="air", meaning="quest for truth and knowledge"),
    MysticalCard(name="The Phoenix", element="fire", meaning="transformation and renewal"),
    MysticalCard(name="The River", element="water", meaning="flow and emotional wisdom"),
    MysticalCard(name="The Mountain", element="earth", meaning="stability and grounding"),
    MysticalCard(name="The Star Guide", element="air", meaning="hope and inspiration"),
    MysticalCard(name="The Mirror", element="water", meaning="self-reflection and clarity"),
    MysticalCard(name="The Bridge", element="earth", meaning="connection and transition"),
    MysticalCard(name="The Flame", element="fire", meaning="passion and purpose"),
    MysticalCard(name="The Garden", element="earth", meaning="growth and nurturing"),
    MysticalCard(name="The Compass", element="air", meaning="direction and guidance"),
    MysticalCard(name="The Ocean", element="water", meaning="depth and mystery"),
    MysticalCard(name="The Lighthouse", element="fire", meaning="illumination and hope"),
)

SEEKER = 0
PHOENIX = 1
STAR_GUIDE = 4
MIRROR = 5
COMPASS = 9


def get_card(name: str) -> MysticalCard:
    for c in MYSTICAL_CARDS:
        if c.name.lower() == name.strip().lower():
            return c
    raise CatalogError(f"Unknown card: {name}")


def card_index(profile: PersonalityProfile) -> int:
    life_area = (profile.pick("life_area") or "").lower()

    if profile.openness > 70:
        return SEEKER if profile.extraversion > 60 else STAR_GUIDE
    if profile.neuroticism > 60:
        return PHOENIX
    if "love" in life_area or "spiritual" in life_area:
        return MIRROR
    if "career" in life_area:
        return COMPASS
    return ((profile.openness + profile.extraversion) // 20) % len(MYSTICAL_CARDS)


def select_card(profile: PersonalityProfile) -> MysticalCard:
    """Pick the card for a profile. First matching rule wins; never fails."""
    return MYSTICAL_CARDS[card_index(profile)]
