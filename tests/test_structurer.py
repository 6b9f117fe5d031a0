"""Tests for ContentStructurer: keyword section headers and owner emphasis."""

from __future__ import annotations

from src.summarizer.pipeline import structurer
from src.summarizer.pipeline.structurer import (
    ACTION_ITEMS_HEADER,
    KEY_DECISIONS_HEADER,
    NEXT_STEPS_HEADER,
    emphasize_owners,
    insert_section_headers,
    structure,
)

UNSTRUCTURED_SUMMARY = "\n".join([
    "The quarterly review covered vendor performance and hiring.",
    "The board decided to renew the Acme contract for two years.",
    "Jordan has a task to draft the renewal terms by Friday.",
    "A follow-up call is planned for next Tuesday.",
    "Overall the mood in the room was positive.",
])


# ── Header Insertion ─────────────────────────────────────────────────────────


class TestSectionHeaders:
    def test_headers_inserted_before_first_matching_line(self):
        assert len(UNSTRUCTURED_SUMMARY) > structurer.MIN_STRUCTURE_LENGTH

        result = structure(UNSTRUCTURED_SUMMARY)

        assert result.split("\n") == [
            "The quarterly review covered vendor performance and hiring.",
            KEY_DECISIONS_HEADER,
            "The board decided to renew the Acme contract for two years.",
            ACTION_ITEMS_HEADER,
            "Jordan has a task to draft the renewal terms by Friday.",
            NEXT_STEPS_HEADER,
            "A follow-up call is planned for next Tuesday.",
            "Overall the mood in the room was positive.",
        ]

    def test_lines_never_dropped_or_reordered(self):
        result = structure(UNSTRUCTURED_SUMMARY)
        headers = {KEY_DECISIONS_HEADER, ACTION_ITEMS_HEADER, NEXT_STEPS_HEADER}
        body = [line for line in result.split("\n") if line not in headers]
        assert body == UNSTRUCTURED_SUMMARY.split("\n")

    def test_each_header_inserted_once(self):
        text = "\n".join([
            "We agreed the rollout order.",
            "They also decided to pause hiring.",
            "Task one is the migration.",
            "Task two is the audit.",
        ])
        result = insert_section_headers(text)
        assert result.count(KEY_DECISIONS_HEADER) == 1
        assert result.count(ACTION_ITEMS_HEADER) == 1

    def test_one_header_per_line(self):
        text = "We agreed on the action plan.\nAssign the review to Sam."
        result = insert_section_headers(text)
        assert result.split("\n") == [
            KEY_DECISIONS_HEADER,
            "We agreed on the action plan.",
            ACTION_ITEMS_HEADER,
            "Assign the review to Sam.",
        ]

    def test_blank_lines_preserved(self):
        text = "Intro line.\n\nThe team decided to proceed."
        result = insert_section_headers(text)
        assert result == f"Intro line.\n\n{KEY_DECISIONS_HEADER}\nThe team decided to proceed."

    def test_short_text_not_restructured(self):
        text = "The team decided to proceed."
        assert structure(text) == text

    def test_existing_headers_block_insertion(self):
        text = "## Summary\n" + UNSTRUCTURED_SUMMARY
        assert structure(text) == text


# ── Owner Emphasis ───────────────────────────────────────────────────────────


class TestOwnerEmphasis:
    def test_owner_emphasized(self):
        assert emphasize_owners("- Jordan: Verify backups") == "- **Jordan**: Verify backups"

    def test_deadline_italicized(self):
        assert (
            emphasize_owners("- Jordan: Verify backups - by Friday")
            == "- **Jordan**: Verify backups *(by Friday)*"
        )

    def test_multi_word_owner(self):
        assert (
            emphasize_owners("- Priya Shah: Draft the budget")
            == "- **Priya Shah**: Draft the budget"
        )

    def test_already_emphasized_untouched(self):
        text = "- **Jordan**: Verify backups *(by Friday)*"
        assert emphasize_owners(text) == text

    def test_non_bullet_lines_untouched(self):
        text = "Jordan: Verify backups"
        assert emphasize_owners(text) == text

    def test_bullet_without_owner_untouched(self):
        text = "- The team agreed to migrate"
        assert emphasize_owners(text) == text

    def test_applies_to_short_text(self):
        assert structure("- Sam: Book the room") == "- **Sam**: Book the room"


# ── Failure Fallback ─────────────────────────────────────────────────────────


def test_structure_failure_returns_input(monkeypatch):
    def explode(text):
        raise RuntimeError("boom")

    monkeypatch.setattr(structurer, "emphasize_owners", explode)
    assert structure("- Sam: Book the room") == "- Sam: Book the room"
