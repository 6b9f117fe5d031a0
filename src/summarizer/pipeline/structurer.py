"""ContentStructurer -- keyword-driven section headers and owner emphasis.

Substantial summaries that arrive without any markdown headers get at most
one "## Key Decisions", "## Action Items" and "## Next Steps" header each,
inserted directly before the first line that matches the section's keyword
set. Lines are never reordered or dropped. Bulleted "Owner: task" lines get
their owner token emphasized regardless of length.
"""

from __future__ import annotations

import re

import structlog

from src.summarizer.pipeline.base import run_guarded

logger = structlog.get_logger(__name__)


# ── Constants ────────────────────────────────────────────────────────────────

MIN_STRUCTURE_LENGTH = 200

KEY_DECISIONS_HEADER = "## Key Decisions"
ACTION_ITEMS_HEADER = "## Action Items"
NEXT_STEPS_HEADER = "## Next Steps"

DECISION_RE = re.compile(r"\b(?:decision|decided|agreed|concluded)", re.IGNORECASE)
ACTION_RE = re.compile(r"\b(?:action|task|assign|deadline|due)", re.IGNORECASE)
NEXT_STEP_RE = re.compile(r"\b(?:next|upcoming|future|plan|schedule)", re.IGNORECASE)

# Checked in this order per line; the first unused match wins.
SECTION_RULES: tuple[tuple[str, re.Pattern], ...] = (
    (KEY_DECISIONS_HEADER, DECISION_RE),
    (ACTION_ITEMS_HEADER, ACTION_RE),
    (NEXT_STEPS_HEADER, NEXT_STEP_RE),
)

_EXISTING_HEADER_RE = re.compile(r"^#{1,6}\s", re.MULTILINE)

# "- Jordan Lee: verify backups - by Friday"
_OWNER_LINE_RE = re.compile(
    r"^- (?!\*)([A-Za-z][^:*\n]{0,39}?):[ \t]*(\S[^\n]*?)"
    r"(?:[ \t]+-[ \t]+([^*\n]+?))?[ \t]*$",
    re.MULTILINE,
)


# ── Public API ───────────────────────────────────────────────────────────────


def structure(text: str) -> str:
    """Insert section headers and emphasize owners.

    Returns the input unchanged if anything goes wrong.
    """
    return run_guarded("structure", _structure, text, fallback=lambda: text)


def insert_section_headers(text: str) -> str:
    """Single forward pass inserting each section header at most once."""
    inserted: set[str] = set()
    structured: list[str] = []

    for line in text.split("\n"):
        if line.strip() and len(inserted) < len(SECTION_RULES):
            for header, pattern in SECTION_RULES:
                if header not in inserted and pattern.search(line):
                    structured.append(header)
                    inserted.add(header)
                    break
        structured.append(line)

    if inserted:
        logger.debug("section_headers_inserted", headers=sorted(inserted))
    return "\n".join(structured)


def emphasize_owners(text: str) -> str:
    """Rewrite "- Owner: task" bullets as "- **Owner**: task".

    A trailing " - deadline" becomes an italic "*(deadline)*".
    """
    return _OWNER_LINE_RE.sub(_format_owner_line, text)


# ── Helpers ──────────────────────────────────────────────────────────────────


def _structure(text: str) -> str:
    if len(text) > MIN_STRUCTURE_LENGTH and not _EXISTING_HEADER_RE.search(text):
        text = insert_section_headers(text)
    return emphasize_owners(text)


def _format_owner_line(match: re.Match) -> str:
    owner, task, deadline = match.group(1).strip(), match.group(2), match.group(3)
    if deadline:
        return f"- **{owner}**: {task} *({deadline})*"
    return f"- **{owner}**: {task}"
