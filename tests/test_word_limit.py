"""Tests for WordLimitEnforcer.

Covers:
    - Text within the limit is returned unchanged
    - Priority lines are emitted first, each group in source order
    - Selection stops at the first overflowing line in each group
    - Non-positive limits mean the default
    - Failure falls back to a raw word slice
"""

from __future__ import annotations

import random

import pytest

from src.summarizer.pipeline import word_limit
from src.summarizer.pipeline.base import word_count
from src.summarizer.pipeline.word_limit import (
    DEFAULT_WORD_LIMIT,
    enforce_word_limit,
    is_priority_line,
)

# 10 words each
OTHER_ONE = "one two three four five six seven eight nine ten"
PRIORITY_ONE = "action item for the team to finish this very soon"
OTHER_TWO = "alpha beta gamma delta epsilon zeta eta theta iota kappa"
PRIORITY_TWO = "decision made by the group after a long debate today"

MIXED_TEXT = "\n".join([OTHER_ONE, PRIORITY_ONE, OTHER_TWO, PRIORITY_TWO])


def _filler_line(index: int, words: int) -> str:
    return " ".join([f"Item{index}"] + ["word"] * (words - 1))


# ── Priority Detection ───────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Action: ship it", True),
        ("The DECISION stands", True),
        ("Follow-up on Monday", True),
        ("Owner is Sam", True),
        ("Report due soon", True),
        ("Budget looks fine", False),
    ],
)
def test_is_priority_line(line, expected):
    assert is_priority_line(line) is expected


# ── Enforcement ──────────────────────────────────────────────────────────────


class TestEnforceWordLimit:
    def test_within_limit_unchanged(self):
        text = "Line one\n\nLine two  with spacing"
        assert enforce_word_limit(text, 50) == text

    def test_exactly_at_limit_unchanged(self):
        assert enforce_word_limit(MIXED_TEXT, 40) == MIXED_TEXT

    def test_priority_lines_first(self):
        assert enforce_word_limit(MIXED_TEXT, 20) == f"{PRIORITY_ONE}\n{PRIORITY_TWO}"

    def test_other_lines_fill_remaining_budget(self):
        assert (
            enforce_word_limit(MIXED_TEXT, 30)
            == f"{PRIORITY_ONE}\n{PRIORITY_TWO}\n{OTHER_ONE}"
        )

    def test_no_partial_lines(self):
        assert enforce_word_limit(MIXED_TEXT, 25) == f"{PRIORITY_ONE}\n{PRIORITY_TWO}"

    def test_stops_at_first_overflow_in_group(self):
        long_priority = "action " + " ".join(["x"] * 11)  # 12 words
        short_priority = "next up"
        short_other = "plain text here"
        text = "\n".join([long_priority, short_priority, short_other])

        assert enforce_word_limit(text, 10) == short_other

    def test_first_line_overflow_gives_empty(self):
        text = "action " + " ".join(["x"] * 20)
        assert enforce_word_limit(text, 5) == ""

    def test_blank_lines_dropped_when_truncating(self):
        text = f"{PRIORITY_ONE}\n\n\n{OTHER_ONE}\n\n{OTHER_TWO}"
        assert enforce_word_limit(text, 20) == f"{PRIORITY_ONE}\n{OTHER_ONE}"

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_means_default(self, limit):
        text = "\n".join(_filler_line(i, 10) for i in range(40))  # 400 words
        result = enforce_word_limit(text, limit)
        assert word_count(result) == DEFAULT_WORD_LIMIT

    def test_failure_falls_back_to_word_slice(self, monkeypatch):
        def explode(text, max_words):
            raise RuntimeError("boom")

        monkeypatch.setattr(word_limit, "_select_lines", explode)
        assert enforce_word_limit("a b\nc d e", 3) == "a b c"

    def test_five_hundred_words_keep_action_lines(self):
        lines = [_filler_line(i, 10) for i in range(48)]
        lines.insert(30, "action " + " ".join(["task"] * 9))
        lines.insert(45, "action " + " ".join(["owner"] * 9))
        text = "\n".join(lines)
        assert word_count(text) == 500

        result = enforce_word_limit(text, 100)
        result_lines = result.split("\n")

        assert word_count(result) <= 100
        assert result_lines[0].startswith("action task")
        assert result_lines[1].startswith("action owner")
        assert result_lines[2] == lines[0]

    def test_grouping_property(self):
        rng = random.Random(1234)
        vocabulary = ["alpha", "beta", "gamma", "action", "next", "delta", "due"]
        lines = [
            " ".join(rng.choice(vocabulary) for _ in range(rng.randint(1, 8)))
            for _ in range(60)
        ]
        text = "\n".join(lines)

        for limit in (5, 25, 60, 120):
            result = enforce_word_limit(text, limit)
            selected = [line for line in result.split("\n") if line]
            assert word_count(result) <= limit

            flags = [is_priority_line(line) for line in selected]
            # Priority block strictly precedes the other block
            assert flags == sorted(flags, reverse=True)

            priority_src = [line for line in lines if is_priority_line(line)]
            other_src = [line for line in lines if not is_priority_line(line)]
            picked_priority = [line for line in selected if is_priority_line(line)]
            picked_other = [line for line in selected if not is_priority_line(line)]
            # Each group keeps a prefix of its source order
            assert picked_priority == priority_src[: len(picked_priority)]
            assert picked_other == other_src[: len(picked_other)]
