"""PromptComposer -- instruction text for the summary model.

Builds the single instruction document sent upstream: fixed content,
formatting and quality rules, the word limit parsed from the user's
instruction, the literal instruction and the transcript. Also holds the
preset instructions for each SummaryType.
"""

from __future__ import annotations

import re

from src.summarizer.pipeline.word_limit import DEFAULT_WORD_LIMIT
from src.summarizer.schemas import SummaryType

# "keep under 100 words", "maximum 250 words", "limit it to 80 words"
WORD_LIMIT_RE = re.compile(
    r"(?:keep under|under|maximum|max|limit.*?to)\s*(\d+)\s*words?",
    re.IGNORECASE,
)


def extract_word_limit(user_prompt: str, default: int = DEFAULT_WORD_LIMIT) -> int:
    """Return the first word limit found in the prompt, else ``default``."""
    match = WORD_LIMIT_RE.search(user_prompt or "")
    if not match:
        return default
    limit = int(match.group(1))
    return limit if limit > 0 else default


# ── Instruction Template ─────────────────────────────────────────────────────

SUMMARY_INSTRUCTION_TEMPLATE = """\
You are an expert meeting summarizer. Create a comprehensive, well-structured summary that captures all important information while maintaining clarity and professional formatting.

CONTENT REQUIREMENTS:
- Capture key decisions with context and rationale
- Extract all action items with clear ownership and realistic deadlines
- Identify important discussion points and outcomes
- Note any risks, blockers, or concerns raised
- Include relevant financial/budget information if mentioned
- Highlight next steps and follow-up requirements
- Preserve important context that affects understanding

STRUCTURE AND FORMATTING:
- Use clear section headers when appropriate (## Header)
- Use bullet points (-) for lists and action items
- Use **bold text** for important decisions, deadlines, and key points
- Use *italic text* for emphasis on critical information
- Organize content logically with proper paragraph breaks
- Ensure smooth flow between sections

QUALITY STANDARDS:
- Maximum {word_limit} words while maintaining completeness
- Use professional, clear language
- Avoid redundancy but preserve important details
- Ensure all action items have clear ownership
- Include specific dates, numbers, and metrics when mentioned
- Maintain accuracy to the original content

HIGHLIGHTING PRIORITIES:
1. **Critical decisions** and their impact
2. **Action items** with owners and deadlines
3. **Important deadlines** and milestones
4. **Risks or blockers** requiring attention
5. **Financial implications** or budget items
6. **Key outcomes** that affect future work

User's specific request: {user_prompt}

Original transcript to summarize:
{transcript}

Generate a professional, well-formatted summary under {word_limit} words:"""


def compose_prompt(
    user_prompt: str,
    transcript: str,
    default_word_limit: int = DEFAULT_WORD_LIMIT,
) -> str:
    """Build the instruction document for the model.

    Args:
        user_prompt: The user's free-text instruction, embedded verbatim.
        transcript: The transcript to summarize, embedded verbatim.
        default_word_limit: Limit used when the prompt names none.

    Returns:
        The full instruction text.
    """
    word_limit = extract_word_limit(user_prompt, default_word_limit)
    return SUMMARY_INSTRUCTION_TEMPLATE.format(
        word_limit=word_limit,
        user_prompt=user_prompt,
        transcript=transcript,
    )


# ── Preset Instructions ──────────────────────────────────────────────────────

PRESET_PROMPTS: dict[SummaryType, str] = {
    SummaryType.EXECUTIVE: (
        "Create a **strategic executive summary** for senior leadership. Focus on: "
        "**key strategic decisions** with business impact, **financial implications** "
        "and budget items, **critical risks** requiring executive attention, "
        "**high-priority action items** with clear ownership and deadlines. Use "
        "professional formatting with headers and emphasis. Keep under 250 words."
    ),
    SummaryType.COMPREHENSIVE: (
        "Create a **comprehensive meeting summary** with clear structure. Include: "
        "**## Key Decisions** with rationale and impact, **## Action Items** organized "
        "by priority with owners and deadlines, **## Discussion Outcomes** and important "
        "points raised, **## Financial/Budget Items** if applicable, **## Risks and "
        "Blockers** requiring attention, **## Next Steps** and follow-up requirements. "
        "Use professional formatting and emphasis. Keep under 300 words."
    ),
    SummaryType.ACTION_ITEMS: (
        "Extract and organize **all action items** with enhanced formatting. Structure "
        "as: **## Immediate Actions** (this week), **## Short-term Actions** (next 2-4 "
        "weeks), **## Long-term Actions** (beyond 1 month). For each item include: "
        "**Owner**: clear task description *(deadline)*. Also include **## Pending "
        "Decisions**, **## Dependencies**, and **## Blockers**. Provide action item "
        "count summary. Keep under 250 words."
    ),
    SummaryType.SALES: (
        "Create a **sales meeting analysis** with structured formatting. Include: "
        "**## Deal Status** (value, timeline, stage), **## Client Insights** (pain "
        "points, solutions presented), **## Objections & Responses**, **## Decision "
        "Makers** and their sentiment, **## Budget Discussion**, **## Next Steps** with "
        "clear owners and deadlines, **## Deal Health Assessment**. Use emphasis for "
        "important numbers and dates. Keep under 250 words."
    ),
    SummaryType.PROJECT: (
        "Create a **project status summary** with clear structure. Include: "
        "**## Project Status** (phase, progress, timeline, budget), **## Recent "
        "Accomplishments**, **## Current Challenges** and blockers with proposed "
        "solutions, **## Resource Updates**, **## Risk Management**, **## Action Items** "
        "by category with owners and deadlines, **## Timeline Updates**, **## Overall "
        "Project Health**. Use formatting to highlight critical information. Keep under "
        "250 words."
    ),
    SummaryType.GENERAL: (
        "Create a **well-structured summary** with clear formatting. Include **key "
        "decisions** with context, **action items** with owners and deadlines, and "
        "**next steps**. Use headers, bullet points, and emphasis to highlight important "
        "information. Keep under 250 words."
    ),
}


def resolve_preset_prompt(
    summary_type: SummaryType | str = SummaryType.GENERAL,
    custom_prompt: str = "",
) -> str:
    """Return the instruction for a preset summary type.

    Unknown types resolve to GENERAL. GENERAL uses ``custom_prompt`` when
    one is given.
    """
    try:
        resolved = SummaryType(summary_type)
    except ValueError:
        resolved = SummaryType.GENERAL

    if resolved is SummaryType.GENERAL and custom_prompt:
        return custom_prompt
    return PRESET_PROMPTS[resolved]
