from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional

Element = Literal["air", "fire", "water", "earth"]

CARD_SLOTS = (
    "burden",
    "leak",
    "survival_skill",
    "shadow_cost",
    "missing_medicine",
    "help_works",
    "boundary_spell",
    "north_star",
    "first_gate",
    "emerging_archetype",
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MysticalCard(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    element: Element
    meaning: str


class PersonalityProfile(CamelModel):
    # Big 5 OCEAN, 0-100
    openness: int = Field(..., ge=0, le=100)
    conscientiousness: int = Field(..., ge=0, le=100)
    extraversion: int = Field(..., ge=0, le=100)
    agreeableness: int = Field(..., ge=0, le=100)
    neuroticism: int = Field(..., ge=0, le=100)

    intuition_vs_sensing: Optional[str] = None
    intuition_vs_sensing_label: Optional[str] = None
    thinking_vs_feeling: Optional[str] = None
    thinking_vs_feeling_label: Optional[str] = None

    past_experiences: Optional[str] = None
    past_experiences_label: Optional[str] = None
    current_challenges: Optional[str] = None
    current_challenges_label: Optional[str] = None
    hopes_and_dreams: Optional[str] = None
    hopes_and_dreams_label: Optional[str] = None
    fears_and_worries: Optional[str] = None
    fears_and_worries_label: Optional[str] = None
    life_area: Optional[str] = None
    life_area_label: Optional[str] = None

    burden_card: Optional[str] = None
    burden_card_label: Optional[str] = None
    leak_card: Optional[str] = None
    leak_card_label: Optional[str] = None
    survival_skill_card: Optional[str] = None
    survival_skill_card_label: Optional[str] = None
    shadow_cost_card: Optional[str] = None
    shadow_cost_card_label: Optional[str] = None
    missing_medicine_card: Optional[str] = None
    missing_medicine_card_label: Optional[str] = None
    help_works_card: Optional[str] = None
    help_works_card_label: Optional[str] = None
    boundary_spell_card: Optional[str] = None
    boundary_spell_card_label: Optional[str] = None
    north_star_card: Optional[str] = None
    north_star_card_label: Optional[str] = None
    first_gate_card: Optional[str] = None
    first_gate_card_label: Optional[str] = None
    emerging_archetype_card: Optional[str] = None
    emerging_archetype_card_label: Optional[str] = None

    # legacy aliases, older questionnaires send these instead of burden/north star
    year_struggles: Optional[str] = None
    year_struggles_label: Optional[str] = None
    year_wants: Optional[str] = None
    year_wants_label: Optional[str] = None

    def pick(self, field: str) -> Optional[str]:
        """Human label if given, else the raw value, else None. Empty strings count as missing."""
        return getattr(self, f"{field}_label") or getattr(self, field) or None


class ReadingRequest(CamelModel):
    personality_profile: PersonalityProfile
    focus_area: Optional[str] = None
    mood: Optional[str] = None


class Reading(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    card_drawn: str
    card_element: Element
    card_meaning: str
    interpretation: str
    guidance_message: str
    action_steps: List[str] = Field(..., min_length=1)
    affirmation: str


class ReadingResponse(CamelModel):
    success: bool = True
    reading_id: Optional[str] = None
    reading: Reading


class StoredReadingResponse(CamelModel):
    reading_id: str
    reading_type: str
    focus_area: Optional[str] = None
    mood: Optional[str] = None
    created_at: str
    reading: Reading


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class Location(BaseModel):
    city: str
    state: Optional[str] = None
    country: str


class AgentRequest(CamelModel):
    personality_profile: PersonalityProfile
    message: str
    conversation_history: Optional[List[ChatMessage]] = None
    location: Optional[Location] = None
    needs_local_recommendations: Optional[bool] = None


class Place(BaseModel):
    name: str
    type: str
    address: str


class LocalRecommendations(CamelModel):
    category: str
    location: str
    places: List[Place]
    note: str
    ai_curated: Optional[Dict[str, Any]] = None


class AgentResponse(CamelModel):
    success: bool = True
    response: str
    local_recommendations: Optional[LocalRecommendations] = None
    needs_location: bool = False


class QuestionChoice(BaseModel):
    value: str
    title: str
    description: str = ""
    label: str


class QuestionCreate(BaseModel):
    text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=2)
    order: int = Field(..., ge=0)
    category: Optional[str] = None


class QuestionUpdate(BaseModel):
    text: Optional[str] = Field(None, min_length=1)
    options: Optional[List[str]] = Field(None, min_length=2)
    order: Optional[int] = Field(None, ge=0)
    category: Optional[str] = None


class Question(CamelModel):
    id: str
    text: str
    options: List[str]
    choices: List[QuestionChoice]
    order: int
    category: Optional[str] = None
    created_at: str
    updated_at: Optional[str] = None
