"""Conversational guide with optional local recommendations."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from .ai import GenerationUnavailable
from .models import AgentRequest, AgentResponse, LocalRecommendations, PersonalityProfile

log = logging.getLogger("clarity.agent")

LOCAL_HINT_RE = re.compile(r"\b(gym|fitness|dating|date|job|work|wellness|yoga|local|near me)\b", re.IGNORECASE)

_CATEGORY_PATTERNS = (
    ("gym", re.compile(r"\b(gym|fitness)\b", re.IGNORECASE)),
    ("dating", re.compile(r"\b(dating|date)\b", re.IGNORECASE)),
    ("jobs", re.compile(r"\b(job|work)\b", re.IGNORECASE)),
    ("wellness", re.compile(r"\b(wellness|yoga|spa)\b", re.IGNORECASE)),
)

LOCAL_GUIDE_SYSTEM_PROMPT = (
    "You are a local guide helping someone pick the best places near them. Respond in JSON only."
)

_FENCE_START_RE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END_RE = re.compile(r"```$")


def wants_local(message: str, flag: Optional[bool] = None) -> bool:
    return bool(flag) or bool(LOCAL_HINT_RE.search(message))


def detect_category(message: str) -> str:
    for category, pattern in _CATEGORY_PATTERNS:
        if pattern.search(message):
            return category
    return "social"


def build_agent_system_prompt(profile: PersonalityProfile) -> str:
    struggles = profile.pick("year_struggles")
    wants = profile.pick("year_wants")
    focus = profile.pick("life_area")

    context = [
        f"Struggles: {struggles}" if struggles else None,
        f"Goals: {wants}" if wants else None,
        f"Focus: {focus}" if focus else None,
    ]
    context_text = "\n".join(c for c in context if c)

    return f"""You are a wise, empathetic AI agent combining spiritual guidance with practical advice.

USER PERSONALITY:
- Openness: {profile.openness}/100
- Conscientiousness: {profile.conscientiousness}/100
- Extraversion: {profile.extraversion}/100
- Agreeableness: {profile.agreeableness}/100

CONTEXT:
{context_text}

Be warm, supportive, and practical. Tailor advice to their personality. Keep responses 2-3 paragraphs."""


def build_local_guide_prompt(
    category: str,
    location: str,
    places: List[Dict[str, str]],
    profile: PersonalityProfile,
) -> str:
    focus = profile.pick("life_area")
    goals = profile.pick("year_wants")
    summary = [
        f"Openness: {profile.openness}/100",
        f"Conscientiousness: {profile.conscientiousness}/100",
        f"Extraversion: {profile.extraversion}/100",
    ]
    if focus:
        summary.append(f"Focus: {focus}")
    if goals:
        summary.append(f"Goals: {goals}")

    places_list = "\n".join(
        f"{i}. {p['name']} ({p['type']}) — {p['address']}" for i, p in enumerate(places, 1)
    )
    return f"""
Location: {location}
Category: {category}
Profile: {", ".join(summary)}

Places:
{places_list}

Return JSON with:
{{
  "summary": string,
  "picks": [{{ "name": string, "why": string, "bestFor": string }}]
}}
Pick up to 3 places from the list. Be concise."""


def parse_json_reply(content: str) -> Optional[Dict[str, Any]]:
    cleaned = _FENCE_END_RE.sub("", _FENCE_START_RE.sub("", content.strip())).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        log.warning("local guide reply was not JSON chars=%d", len(content))
        return None
    return data if isinstance(data, dict) else None


class Agent:
    def __init__(self, generator: Any, guide: Any):
        self.generator = generator
        self.guide = guide

    def curate(self, category: str, location: str, places: List[Dict[str, str]], profile: PersonalityProfile) -> Optional[Dict[str, Any]]:
        prompt = build_local_guide_prompt(category, location, places, profile)
        try:
            content = self.generator.generate(
                LOCAL_GUIDE_SYSTEM_PROMPT, prompt, temperature=0.4, max_tokens=400, require_content=True
            )
        except GenerationUnavailable as e:
            log.warning("local guide curation unavailable: %s", e.last_error)
            return None
        if not content:
            return None
        return parse_json_reply(content)

    def respond(self, req: AgentRequest) -> AgentResponse:
        """Answer one message. Raises GenerationUnavailable if the main reply cannot be generated."""
        profile = req.personality_profile
        needs_local = wants_local(req.message, req.needs_local_recommendations)

        local: Optional[Dict[str, Any]] = None
        if needs_local and req.location is not None:
            local = self.guide.recommend(req.location, detect_category(req.message), profile)

        messages = [{"role": "system", "content": build_agent_system_prompt(profile)}]
        messages.extend(m.model_dump() for m in req.conversation_history or [])
        messages.append({"role": "user", "content": req.message})
        answer = self.generator.complete(messages, temperature=0.8, max_tokens=800)

        recommendations = None
        if local and local.get("success"):
            places = local["recommendations"]
            curated = self.curate(local["category"], local["location"], places, profile) if places else None
            recommendations = LocalRecommendations(
                category=local["category"],
                location=local["location"],
                places=places,
                note=local["personalizedNote"],
                ai_curated=curated,
            )

        return AgentResponse(
            response=answer,
            local_recommendations=recommendations,
            needs_location=needs_local and req.location is None,
        )
