"""Tests for the PromptComposer and preset instructions."""

from __future__ import annotations

import pytest

from src.summarizer.pipeline.prompts import (
    PRESET_PROMPTS,
    compose_prompt,
    extract_word_limit,
    resolve_preset_prompt,
)
from src.summarizer.schemas import SummaryType


# ── Word Limit Extraction ────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("prompt", "expected"),
    [
        ("Summarize this, keep under 100 words", 100),
        ("Maximum 250 words please", 250),
        ("max 50 word summary", 50),
        ("Please limit it to 80 words", 80),
        ("Write UNDER 120 WORDS", 120),
        ("Summarize the key points", 300),
        ("Keep under 0 words", 300),
        ("", 300),
    ],
)
def test_extract_word_limit(prompt, expected):
    assert extract_word_limit(prompt) == expected


def test_extract_word_limit_custom_default():
    assert extract_word_limit("Summarize the key points", default=150) == 150


def test_first_limit_wins():
    assert extract_word_limit("keep under 100 words, maximum 200 words") == 100


# ── Instruction Composition ──────────────────────────────────────────────────


class TestComposePrompt:
    def test_embeds_limit_prompt_and_transcript(self):
        prompt = "Summarize the sync, keep under 100 words"
        transcript = "Alice: We decided to ship on Friday."

        instruction = compose_prompt(prompt, transcript)

        assert "Maximum 100 words while maintaining completeness" in instruction
        assert f"User's specific request: {prompt}" in instruction
        assert f"Original transcript to summarize:\n{transcript}" in instruction
        assert instruction.endswith(
            "Generate a professional, well-formatted summary under 100 words:"
        )

    def test_default_limit_used(self):
        instruction = compose_prompt("Summarize the sync", "Alice: hello there")
        assert "Maximum 300 words" in instruction

    def test_braces_in_input_preserved(self):
        instruction = compose_prompt("Summarize {all} of it", "Config was {x: 1}")
        assert "Summarize {all} of it" in instruction
        assert "Config was {x: 1}" in instruction

    def test_deterministic(self):
        assert compose_prompt("Summarize", "Text here") == compose_prompt("Summarize", "Text here")


# ── Presets ──────────────────────────────────────────────────────────────────


class TestPresets:
    def test_every_type_has_a_preset(self):
        assert set(PRESET_PROMPTS) == set(SummaryType)

    @pytest.mark.parametrize(
        ("summary_type", "limit"),
        [
            (SummaryType.EXECUTIVE, 250),
            (SummaryType.COMPREHENSIVE, 300),
            (SummaryType.ACTION_ITEMS, 250),
            (SummaryType.SALES, 250),
            (SummaryType.PROJECT, 250),
            (SummaryType.GENERAL, 250),
        ],
    )
    def test_presets_carry_word_limit(self, summary_type, limit):
        assert extract_word_limit(PRESET_PROMPTS[summary_type]) == limit

    def test_resolve_by_value(self):
        assert "**strategic executive summary**" in resolve_preset_prompt("executive")
        assert resolve_preset_prompt("action-items") == PRESET_PROMPTS[SummaryType.ACTION_ITEMS]

    def test_unknown_type_is_general(self):
        assert resolve_preset_prompt("haiku") == PRESET_PROMPTS[SummaryType.GENERAL]

    def test_custom_prompt_only_for_general(self):
        custom = "Summarize as a haiku"
        assert resolve_preset_prompt(SummaryType.GENERAL, custom) == custom
        assert (
            resolve_preset_prompt(SummaryType.SALES, custom)
            == PRESET_PROMPTS[SummaryType.SALES]
        )
