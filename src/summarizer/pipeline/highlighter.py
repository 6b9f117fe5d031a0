"""Highlighter -- bold dates, currency amounts and percentages.

Only the matched tokens gain ``**`` delimiters; every other character is
left as-is. Tokens inside an emphasis span (``**...**`` or ``*...*``) or
directly next to a ``*`` are skipped, so highlighting twice changes nothing,
even when the model left an unbalanced ``**`` on the line.
"""

from __future__ import annotations

import re

from src.summarizer.pipeline.base import run_guarded

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|"
    "November|December|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec"
)

HIGHLIGHT_RE = re.compile(
    # ISO dates: 2024-08-15
    r"\b\d{4}-\d{2}-\d{2}\b"
    # Numeric dates: 8/15, 08/15/2024
    r"|\b\d{1,2}/\d{1,2}(?:/\d{2,4})?\b"
    # Month + day, optional year: Aug 15, August 15th, 2024
    rf"|\b(?:{_MONTHS})\.?[ \t]+\d{{1,2}}(?:st|nd|rd|th)?(?:,?[ \t]+\d{{4}})?\b"
    # Month + year: August 2024
    rf"|\b(?:{_MONTHS})\.?[ \t]+\d{{4}}\b"
    # Currency: $5,000 / $1.5M / $20 million
    r"|\$\d+(?:,\d{3})*(?:\.\d+)?(?:[ \t]?(?:[KMB]|million|billion|thousand)\b)?"
    # Percentages: 15%, 2.5%
    r"|\b\d+(?:\.\d+)?%"
)

# An opener must be followed, and a closer preceded, by a non-space,
# non-star character; bold content never contains another "**". A stray
# "** " can therefore never pair with the opener of a real span.
_EMPHASIS_SPAN_RE = re.compile(
    r"\*\*(?=[^\s*])(?:(?!\*\*)[^\n])*?(?<=[^\s*])\*\*"
    r"|\*(?=[^\s*])[^*\n]*?(?<=[^\s*])\*"
)


def highlight(text: str) -> str:
    """Wrap recognized dates, amounts and percentages in ``**``."""
    return run_guarded("highlight", _highlight, text, fallback=lambda: text)


def _highlight(text: str) -> str:
    spans = [match.span() for match in _EMPHASIS_SPAN_RE.finditer(text)]
    pieces: list[str] = []
    last = 0
    for match in HIGHLIGHT_RE.finditer(text):
        start, end = match.span()
        if _overlaps_span(start, end, spans) or _touches_marker(text, start, end):
            continue
        pieces.append(text[last:start])
        pieces.append(f"**{match.group(0)}**")
        last = end
    pieces.append(text[last:])
    return "".join(pieces)


def _overlaps_span(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < span_end and end > span_start for span_start, span_end in spans)


def _touches_marker(text: str, start: int, end: int) -> bool:
    # A token flush against "*" is already wrapped, even when its markers
    # pair up differently on a later pass.
    return (start > 0 and text[start - 1] == "*") or (end < len(text) and text[end] == "*")
