"""Template rendering and prompt field derivation."""

from clarity.cards import get_card
from clarity.prompting import (
    DEFAULT_PROMPT_TEMPLATE,
    build_prompt,
    context_description,
    personality_description,
    prompt_values,
    render_template,
    resolve_slot,
)

from conftest import make_profile


class TestRenderTemplate:
    def test_replaces_every_occurrence(self):
        assert render_template("{{x}}{{x}}", {"x": "Q"}) == "QQ"

    def test_unknown_token_left_literally(self):
        assert render_template("Hello {{unknown}} {{name}}", {"name": "Ada"}) == "Hello {{unknown}} Ada"

    def test_substituted_text_is_not_rescanned(self):
        out = render_template("{{a}} / {{b}}", {"a": "{{b}}", "b": "B"})
        assert out == "{{b}} / B"

    def test_values_are_literal(self):
        # backslashes and group references must survive untouched
        assert render_template("{{v}}", {"v": r"C:\new \1 $0"}) == r"C:\new \1 $0"


class TestSlots:
    def test_label_then_value_then_unrevealed(self):
        profile = make_profile(
            leak_card="leak_fog",
            burden_card="burden_atlas",
            burden_card_label="The Atlas — carrying everyone",
        )
        assert resolve_slot(profile, "burden") == "The Atlas — carrying everyone"
        assert resolve_slot(profile, "leak") == "leak_fog"
        assert resolve_slot(profile, "first_gate") == "Unrevealed"

    def test_empty_label_falls_back_to_value(self):
        profile = make_profile(help_works_card="help_table", help_works_card_label="")
        assert resolve_slot(profile, "help_works") == "help_table"

    def test_legacy_aliases_fill_burden_and_north_star(self):
        profile = make_profile(year_struggles="burden_fog", year_wants_label="The Open Heart")
        assert resolve_slot(profile, "burden") == "burden_fog"
        assert resolve_slot(profile, "north_star") == "The Open Heart"
        assert resolve_slot(profile, "leak") == "Unrevealed"

    def test_all_ten_slots_in_values(self):
        values = prompt_values(make_profile(), get_card("The Seeker"))
        for key in (
            "burdenCard", "leakCard", "survivalSkillCard", "shadowCostCard", "missingMedicineCard",
            "helpWorksCard", "boundarySpellCard", "northStarCard", "firstGateCard", "emergingArchetypeCard",
        ):
            assert values[key] == "Unrevealed"


class TestPersonalityDescription:
    def test_bands_and_emotional_stability(self):
        profile = make_profile(openness=71, conscientiousness=41, extraversion=40, agreeableness=100, neuroticism=80)
        desc = personality_description(profile)
        assert "- Openness: 71/100 (highly creative and curious)" in desc
        assert "- Conscientiousness: 41/100 (flexible)" in desc
        assert "- Extraversion: 40/100 (introspective)" in desc
        assert "- Agreeableness: 100/100 (compassionate and cooperative)" in desc
        assert "- Emotional Stability: 20/100 (deeply feeling)" in desc

    def test_cognitive_style_defaults_to_balanced(self):
        desc = personality_description(make_profile(thinking_vs_feeling="feeling"))
        assert "Cognitive Style: balanced" in desc
        assert "Decision Making: feeling" in desc


class TestContextDescription:
    def test_only_present_lines_are_included(self):
        profile = make_profile(current_challenges="deadlines", life_area_label="Career")
        desc = context_description(profile, mood="hopeful")
        assert desc.splitlines() == [
            "Life Context:",
            "Current Challenges: deadlines",
            "Focus Area: Career",
            "Current Mood: hopeful",
        ]

    def test_struggles_and_desire_fall_back_to_slots(self):
        profile = make_profile(burden_card_label="The Fog", north_star_card="north_star_true_line")
        desc = context_description(profile, focus_area="rest")
        assert "This Year's Struggles: The Fog" in desc
        assert "This Year's Desire: north_star_true_line" in desc
        assert "Today's Focus: rest" in desc

    def test_no_placeholder_words_for_missing_fields(self):
        desc = context_description(make_profile())
        assert desc == "Life Context:"
        assert "None" not in desc
        assert "undefined" not in desc


def test_build_prompt_fills_default_template():
    profile = make_profile(burden_card_label="The Atlas", openness=80, extraversion=75)
    card = get_card("The Seeker")
    prompt = build_prompt(DEFAULT_PROMPT_TEMPLATE, profile, card, focus_area="career", mood="calm")

    assert "{{" not in prompt
    assert "1. The Burden: The Atlas" in prompt
    assert "2. The Leak: Unrevealed" in prompt
    assert 'The seeker has drawn "The Seeker" (air element - symbolizing quest for truth and knowledge).' in prompt
    assert "Personality Traits (Big 5 OCEAN):" in prompt
    assert "Today's Focus: career" in prompt
    assert "SECTION II — The Path Opens" in prompt


def test_build_prompt_keeps_unknown_tokens_in_custom_template():
    prompt = build_prompt("{{cardName}} / {{notAField}}", make_profile(), get_card("The Ocean"))
    assert prompt == "The Ocean / {{notAField}}"
