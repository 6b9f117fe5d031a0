"""TextNormalizer -- ordered, idempotent repair rules for raw model output.

Raw model text arrives with artifacts from line wrapping and token
streaming: words split across lines ("Decision\\ns"), closing brackets
stranded on their own line, parentheses injected into compounds
("short (term"), dates split as "2024 (08-15)", mixed bullet glyphs and
empty emphasis pairs. Each artifact class is repaired by one named, pure
``str -> str`` rule; RULES fixes their order.

normalize() runs the whole rule chain until the text stops changing, so
``normalize(normalize(x)) == normalize(x)``. A rule that raises is skipped
for that pass (its input is kept) and the failure is logged; normalization
never raises.

Exports:
    RULES: The ordered rule chain.
    normalize: Apply RULES until stable.
    collapse_whitespace, reattach_word_fragments, reattach_stray_punctuation,
    repair_split_headers, repair_broken_compounds, repair_split_dates,
    normalize_markers, clean_emphasis_markers: The individual rules.
"""

from __future__ import annotations

import re
from typing import Callable

import structlog

from src.summarizer.pipeline.base import run_guarded

logger = structlog.get_logger(__name__)


# ── Constants ────────────────────────────────────────────────────────────────

MAX_PASSES = 10
MAX_FRAGMENT_LENGTH = 4

# Section headers models commonly emit; singular stems so that a wrapped
# plural "s" can be re-attached.
SPLIT_HEADER_STEMS = (
    "Risks and Concern",
    "Pending Decision",
    "Key Decision",
    "Action Item",
    "Next Step",
    "Dependencie",
    "Deliverable",
    "Milestone",
    "Blocker",
    "Concern",
    "Risk",
)

DASHED_HEADERS = (
    "Pending Decisions",
    "Dependencies",
    "Blockers",
    "Risks",
)


# ── Patterns ─────────────────────────────────────────────────────────────────

_HORIZONTAL_SPACE_RE = re.compile(r"[ \t\f\v\u00a0]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")

# Previous line ends in a word character; the next line is nothing but a
# short lowercase/digit fragment, optionally followed by punctuation.
_FRAGMENT_RE = re.compile(
    r"(\w)\n[ \t]*([a-z0-9]{1,%d})([.,;:!?)\]]*)[ \t]*(?=\n|$)" % MAX_FRAGMENT_LENGTH
)

_STRAY_PUNCTUATION_RE = re.compile(r"(\S)\n[ \t]*([)\]}.,;:!?]+)")

_SPLIT_HEADER_RE = re.compile(
    r"^((?:#{1,6}[ \t]*|- )?(?:\*\*)?(?:"
    + "|".join(r"[ \t]+".join(map(re.escape, stem.split())) for stem in SPLIT_HEADER_STEMS)
    + r"))\n[ \t]*s\b",
    re.MULTILINE,
)

_DASHED_HEADER_RE = re.compile(
    r"^((?:#{1,6}[ \t]*)?(?:" + "|".join(map(re.escape, DASHED_HEADERS)) + r"))-(?=[A-Za-z])",
    re.MULTILINE,
)

_PAREN_COMPOUND_RE = re.compile(
    r"\b(short|long|mid|near)[ \t]*\([ \t]*(term)\b(?:[ \t]*\))?",
    re.IGNORECASE,
)
_COUNTED_TERM_RE = re.compile(r"\b(\d+[ \t]+)(short|long)[ \t]+(term)\b", re.IGNORECASE)
_LINE_HYPHEN_RE = re.compile(r"([A-Za-z])-\n[ \t]*([a-z])")

_SPLIT_DATE_RE = re.compile(r"\b(\d{4})\s*\(\s*(\d{2})-(\d{2})\s*\)")

_BULLET_RE = re.compile(r"^(?:[*+\-][ \t]+|[•·▪‣][ \t]*)(?=\S)", re.MULTILINE)
_HEADER_MARK_RE = re.compile(r"^(#{1,6})(?=[^#\s])", re.MULTILINE)

_QUAD_EMPHASIS_RE = re.compile(r"\*{4}([^*\n]+?)\*{4}")
_EMPHASIS_PAIR_RE = re.compile(r"\*\*([^*\n]*)\*\*")
_STRAY_STAR_COLON_RE = re.compile(r"(?<![*\w])([A-Za-z]+)\*:")


# ── Rules ────────────────────────────────────────────────────────────────────


def collapse_whitespace(text: str) -> str:
    """Collapse runs of spaces, trim every line, keep at most one blank line."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_SPACE_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()


def reattach_word_fragments(text: str) -> str:
    """Join short wrapped fragments back onto the previous line.

    "Decision\\ns" -> "Decisions", "202\\n4" -> "2024". Repeats until no
    fragment is left, so chains like "Decisi\\non\\ns" collapse fully.
    """
    return _sub_until_stable(_FRAGMENT_RE, r"\1\2\3", text)


def reattach_stray_punctuation(text: str) -> str:
    """Move a closing bracket or punctuation mark that starts a line up.

    "Server Outage (2024-08-15\\n)" -> "Server Outage (2024-08-15)".
    """
    return _sub_until_stable(_STRAY_PUNCTUATION_RE, r"\1\2", text)


def repair_split_headers(text: str) -> str:
    """Repair known section headers broken across a line.

    "Pending Decision\\ns" -> "Pending Decisions" (even when text follows
    the "s"), and "Blockers-Vendor" -> "Blockers - Vendor".
    """
    text = _SPLIT_HEADER_RE.sub(r"\1s", text)
    return _DASHED_HEADER_RE.sub(r"\1 - ", text)


def repair_broken_compounds(text: str) -> str:
    """Repair hyphenated compounds mangled by a parenthesis or a line wrap.

    "short (term" -> "short-term", "4 Short term" -> "4 Short-term",
    "follow-\\nup" -> "follow-up".
    """
    text = _PAREN_COMPOUND_RE.sub(r"\1-\2", text)
    text = _COUNTED_TERM_RE.sub(r"\1\2-\3", text)
    return _LINE_HYPHEN_RE.sub(r"\1-\2", text)


def repair_split_dates(text: str) -> str:
    """Rejoin ISO dates split as "YYYY (MM-DD)".

    "2024 (08-15)" -> "2024-08-15" and "(2024 (08-15))" -> "(2024-08-15)".
    """
    return _SPLIT_DATE_RE.sub(r"\1-\2-\3", text)


def normalize_markers(text: str) -> str:
    """Use "- " for every bullet and "# " spacing for every header."""
    text = _BULLET_RE.sub("- ", text)
    return _HEADER_MARK_RE.sub(r"\1 ", text)


def clean_emphasis_markers(text: str) -> str:
    """Drop empty emphasis pairs and collapse doubled ones.

    "****Budget****" -> "**Budget**", "** **" -> " ", "Count*:" -> "Count:".
    """
    text = _QUAD_EMPHASIS_RE.sub(r"**\1**", text)
    text = _sub_until_stable(_EMPHASIS_PAIR_RE, _drop_empty_pair, text)
    return _STRAY_STAR_COLON_RE.sub(r"\1:", text)


RULES: tuple[Callable[[str], str], ...] = (
    collapse_whitespace,
    reattach_word_fragments,
    reattach_stray_punctuation,
    repair_split_headers,
    repair_broken_compounds,
    repair_split_dates,
    normalize_markers,
    clean_emphasis_markers,
)


# ── Normalizer ───────────────────────────────────────────────────────────────


def normalize(raw: str) -> str:
    """Apply RULES in order, repeating the chain until the text is stable.

    Args:
        raw: Untrusted model output.

    Returns:
        Normalized text; normalizing it again returns it unchanged.
    """
    text = raw or ""
    for _ in range(MAX_PASSES):
        repaired = _apply_rules(text)
        if repaired == text:
            return repaired
        text = repaired

    logger.warning("normalizer_not_converged", passes=MAX_PASSES, length=len(text))
    return text


def _apply_rules(text: str) -> str:
    for rule in RULES:
        text = run_guarded(
            f"normalize.{rule.__name__}",
            rule,
            text,
            fallback=lambda current=text: current,
        )
    return text


# ── Helpers ──────────────────────────────────────────────────────────────────


def _sub_until_stable(
    pattern: re.Pattern,
    repl: str | Callable[[re.Match], str],
    text: str,
) -> str:
    while True:
        repaired = pattern.sub(repl, text)
        if repaired == text:
            return repaired
        text = repaired


def _drop_empty_pair(match: re.Match) -> str:
    inner = match.group(1)
    if inner.strip():
        return match.group(0)
    return " " if inner else ""
