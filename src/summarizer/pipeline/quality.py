"""Pure Python quality scoring for generated summaries.

Computes a deterministic 0-100 score from four signal categories:
1. Compression ratio (summary words / transcript words)
2. Structure (emphasis, headers, bullets)
3. Content completeness (actions, decisions, next steps, specific data)
4. Professional language (domain terms, ownership, time references)

Do NOT use an LLM for scoring. The same summary and transcript must always
produce the same report.

Exports:
    QualityValidator: Scoring engine producing a QualityReport.
    NEUTRAL_REPORT: Report returned when validation itself fails.
"""

from __future__ import annotations

import re

from src.summarizer.pipeline.base import run_guarded, word_count
from src.summarizer.schemas import QualityReport

NEUTRAL_REPORT = QualityReport(
    score=75,
    issues=["Unable to validate content quality"],
    suggestions=[],
    is_valid=True,
)

# ── Signal Patterns ──────────────────────────────────────────────────────────

ACTION_RE = re.compile(r"action|task|assign|deadline|due", re.IGNORECASE)
DECISION_RE = re.compile(r"decision|decided|agreed|concluded", re.IGNORECASE)
NEXT_STEP_RE = re.compile(r"next|follow.?up|upcoming", re.IGNORECASE)
SPECIFIC_DATA_RE = re.compile(r"\$[\d,]+|\d+%|\d{1,2}/\d{1,2}|\d{4}-\d{2}-\d{2}")

PROFESSIONAL_TERMS_RE = re.compile(
    r"action items?|decisions?|discussed?|agreed?|follow[- ]up|next steps?",
    re.IGNORECASE,
)
# "Jordan:" or "**Jordan**:" -- case-sensitive on purpose.
OWNERSHIP_RE = re.compile(r"\b[A-Z][a-z]+\*{0,2}\s*:")
TIME_REFERENCE_RE = re.compile(r"by\s+\w+|due\s+\w+|\d{1,2}/\d{1,2}|\w+day", re.IGNORECASE)

HEADER_RE = re.compile(r"^#{1,6}\s", re.MULTILINE)
BULLET_RE = re.compile(r"^- ", re.MULTILINE)

# Broader keyword sets used to check the transcript for content that the
# summary should carry over.
TRANSCRIPT_ACTION_RE = re.compile(
    r"action|task|assign|deadline|due|follow.?up|next step", re.IGNORECASE
)
TRANSCRIPT_DECISION_RE = re.compile(r"decision|decide|agreed|conclude|resolve", re.IGNORECASE)


class QualityValidator:
    """Score a summary against its transcript (0-100, higher = better).

    Scoring formula:
    - Start at BASE_SCORE (60)
    - Compression ratio: +15 inside [0.1, 0.3], else +10 inside [0.05, 0.5],
      else -10 below 0.03 or above 0.7
    - Structure (max +15): +5 each for emphasis, headers, bullet lines
    - Content (max +10): +3 actions, +3 decisions, +2 next steps,
      +2 specific numbers/dates/currency
    - Language (max +10): +5 domain terms, +3 "Name:" ownership,
      +2 time reference
    - Floor at 0, ceiling at 100

    A summary is valid when score >= MIN_VALID_SCORE and it has at least
    MIN_SUMMARY_WORDS words.
    """

    BASE_SCORE = 60
    MIN_VALID_SCORE = 60
    MIN_SUMMARY_WORDS = 20
    FORMATTING_HINT_WORDS = 50

    def validate(self, summary: str, transcript: str) -> QualityReport:
        """Build the full quality report. Never raises."""
        return run_guarded(
            "validate_quality",
            self._validate,
            summary,
            transcript,
            fallback=lambda: NEUTRAL_REPORT,
        )

    def calculate_score(self, summary: str, transcript: str) -> int:
        """Compute the bounded 0-100 score.

        Args:
            summary: Final summary text.
            transcript: Original transcript text.

        Returns:
            Integer score clamped to [0, 100].
        """
        score = self.BASE_SCORE

        # 1. Length appropriateness
        ratio = _compression_ratio(summary, transcript)
        if 0.1 <= ratio <= 0.3:
            score += 15
        elif 0.05 <= ratio <= 0.5:
            score += 10
        elif ratio < 0.03 or ratio > 0.7:
            score -= 10

        # 2. Structure and formatting
        if "*" in summary:
            score += 5
        if HEADER_RE.search(summary):
            score += 5
        if BULLET_RE.search(summary):
            score += 5

        # 3. Content completeness
        if ACTION_RE.search(summary):
            score += 3
        if DECISION_RE.search(summary):
            score += 3
        if NEXT_STEP_RE.search(summary):
            score += 2
        if SPECIFIC_DATA_RE.search(summary):
            score += 2

        # 4. Professional language and clarity
        if PROFESSIONAL_TERMS_RE.search(summary):
            score += 5
        if OWNERSHIP_RE.search(summary):
            score += 3
        if TIME_REFERENCE_RE.search(summary):
            score += 2

        return max(0, min(100, score))

    def _validate(self, summary: str, transcript: str) -> QualityReport:
        issues: list[str] = []
        suggestions: list[str] = []
        is_valid = True

        summary_words = word_count(summary)

        if summary_words < self.MIN_SUMMARY_WORDS:
            issues.append(
                f"Summary is too short (less than {self.MIN_SUMMARY_WORDS} words)"
            )
            suggestions.append("Expand the summary to include more key details")
            is_valid = False

        ratio = _compression_ratio(summary, transcript)
        if ratio > 0.8:
            issues.append("Summary is too long relative to original text")
            suggestions.append("Condense the summary to focus on key points")
        elif ratio < 0.05:
            issues.append("Summary may be too brief and missing important details")
            suggestions.append("Include more context and important details")

        if TRANSCRIPT_ACTION_RE.search(transcript) and not TRANSCRIPT_ACTION_RE.search(summary):
            issues.append("Missing action items that appear to be in the original transcript")
            suggestions.append("Include action items with clear ownership and deadlines")

        if TRANSCRIPT_DECISION_RE.search(transcript) and not TRANSCRIPT_DECISION_RE.search(summary):
            issues.append("Missing key decisions that appear to be in the original transcript")
            suggestions.append("Include important decisions and their rationale")

        has_formatting = "**" in summary or "##" in summary or "- " in summary
        if not has_formatting and summary_words > self.FORMATTING_HINT_WORDS:
            suggestions.append(
                "Consider adding formatting (headers, bullet points, emphasis) "
                "for better readability"
            )

        score = self.calculate_score(summary, transcript)
        if score < self.MIN_VALID_SCORE:
            is_valid = False
            issues.append(f"Quality score is low ({score}/100)")

        return QualityReport(
            score=score,
            issues=issues,
            suggestions=suggestions,
            is_valid=is_valid,
        )


def _compression_ratio(summary: str, transcript: str) -> float:
    transcript_words = word_count(transcript)
    if transcript_words == 0:
        return 0.0
    return word_count(summary) / transcript_words
