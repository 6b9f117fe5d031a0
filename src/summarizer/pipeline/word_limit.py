"""WordLimitEnforcer -- priority-aware truncation to a word budget.

Lines mentioning actions, decisions, owners or deadlines are kept ahead of
everything else. The two groups are emitted as blocks (priority first),
each in its original relative order; lines are taken whole, greedily,
until the first one that would overflow the budget.

Priority lines always surface first even when they appeared later in the
source. Downstream consumers rely on that block ordering, so it is kept
instead of interleaving by document position.
"""

from __future__ import annotations

import re

from src.summarizer.pipeline.base import run_guarded, word_count

DEFAULT_WORD_LIMIT = 300

PRIORITY_KEYWORDS = (
    "action",
    "decision",
    "next",
    "follow",
    "deadline",
    "owner",
    "assigned",
    "due",
)

PRIORITY_RE = re.compile("|".join(PRIORITY_KEYWORDS), re.IGNORECASE)


def is_priority_line(line: str) -> bool:
    return bool(PRIORITY_RE.search(line))


def enforce_word_limit(text: str, max_words: int = DEFAULT_WORD_LIMIT) -> str:
    """Truncate ``text`` to at most ``max_words`` words.

    Text already within the limit is returned unchanged. A non-positive
    limit means DEFAULT_WORD_LIMIT. If line selection fails, falls back to
    a plain slice of the first ``max_words`` words.

    Args:
        text: Highlighted summary text.
        max_words: Word budget.

    Returns:
        The final summary.
    """
    if max_words <= 0:
        max_words = DEFAULT_WORD_LIMIT

    return run_guarded(
        "enforce_word_limit",
        _select_lines,
        text,
        max_words,
        fallback=lambda: " ".join(text.split()[:max_words]),
    )


def _select_lines(text: str, max_words: int) -> str:
    if word_count(text) <= max_words:
        return text

    lines = [line for line in text.split("\n") if line.strip()]
    priority_lines = [line for line in lines if is_priority_line(line)]
    other_lines = [line for line in lines if not is_priority_line(line)]

    selected: list[str] = []
    total = 0
    for group in (priority_lines, other_lines):
        for line in group:
            line_words = word_count(line)
            if total + line_words > max_words:
                break
            selected.append(line)
            total += line_words

    return "\n".join(selected)
