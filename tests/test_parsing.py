"""Parsing free-form reading replies."""

import pytest

from clarity.parsing import (
    FALLBACK_ACTION,
    FALLBACK_AFFIRMATION,
    FALLBACK_GUIDANCE,
    FALLBACK_INTERPRETATION,
    extract_bullets,
    parse_reading_text,
)

from conftest import SAMPLE_REPLY


def test_minimal_two_section_reply():
    text = "SECTION I — The Reading\nAlpha text.\nSECTION II — The Path Opens\n- Step one detail.\n- Step two."
    parsed = parse_reading_text(text)
    assert parsed.interpretation == "Alpha text."
    assert list(parsed.actions) == ["Step one detail.", "Step two."]
    assert parsed.guidance == FALLBACK_GUIDANCE


@pytest.mark.parametrize("text", ["", None, "   \n ", "No markers here at all"])
def test_unstructured_reply_uses_every_fallback(text):
    parsed = parse_reading_text(text)
    assert parsed.interpretation == FALLBACK_INTERPRETATION
    assert parsed.guidance == FALLBACK_GUIDANCE
    assert parsed.actions == (FALLBACK_ACTION,)
    assert parsed.affirmation == FALLBACK_AFFIRMATION
    assert parsed.unstructured


def test_full_reply():
    parsed = parse_reading_text(SAMPLE_REPLY)
    assert parsed.interpretation.startswith("The Atlas sat on your shoulders")
    assert parsed.interpretation.endswith("not a reinvention.")
    assert parsed.guidance == "Lean on containers that hold you."
    assert parsed.actions[0] == "A weekly class with a stable cohort supports The Table and The Steady Flame."
    assert parsed.actions[1].startswith("A beginner-friendly movement practice")
    assert parsed.affirmation == "The first gate is already open."
    assert parsed.fallbacks == ()
    assert not parsed.unstructured


def test_markers_are_case_insensitive_and_crlf_is_normalized():
    text = "section i: the reading\r\nQuiet year.\r\nSection II - the path opens\r\n• Rest more.\r\n"
    parsed = parse_reading_text(text)
    assert parsed.interpretation == "Quiet year."
    assert parsed.actions == ("Rest more.",)


def test_missing_section_two_keeps_interpretation():
    parsed = parse_reading_text("SECTION I — The Reading\nOnly the story.")
    assert parsed.interpretation == "Only the story."
    assert parsed.actions == (FALLBACK_ACTION,)
    assert "actions" in parsed.fallbacks
    assert not parsed.unstructured


def test_affirmation_is_trailing_sentence():
    text = (
        "SECTION I — The Reading\nThe year was heavy. Then it softened!\n"
        "SECTION II — The Path Opens\n- Walk.\nTrust the turning, and so the gate opens."
    )
    assert parse_reading_text(text).affirmation == "Trust the turning, and so the gate opens."


def test_affirmation_falls_back_without_terminal_punctuation():
    parsed = parse_reading_text("SECTION I — The Reading\nA story. Still going")
    assert parsed.affirmation == FALLBACK_AFFIRMATION


class TestExtractBullets:
    def test_body_before_bullets_and_mixed_glyphs(self):
        section = "Gentle guidance here.\n\nMore guidance.\n- First\n* Second\n• Third"
        body, bullets = extract_bullets(section)
        assert body == "Gentle guidance here.\nMore guidance."
        assert bullets == ["First", "Second", "Third"]

    def test_continuation_lines_join_with_single_space(self):
        body, bullets = extract_bullets("- A gym\n   with set times\n\n   and a coach\n- Dance class")
        assert body == ""
        assert bullets == ["A gym with set times and a coach", "Dance class"]

    def test_glyph_without_space_is_not_a_bullet(self):
        body, bullets = extract_bullets("-not a bullet\n**bold**")
        assert bullets == []
        assert body == "-not a bullet\n**bold**"
