#!/usr/bin/env python3
"""CLI script to summarize a transcript file.

Usage:
    python scripts/summarize_transcript.py --transcript meeting.txt --prompt "Summarize, keep under 150 words"
    python scripts/summarize_transcript.py --transcript meeting.txt --type action-items
    python scripts/summarize_transcript.py --transcript meeting.txt --type executive --json

Reads API keys and model settings from the environment or .env file.
Exit code 0 on success, 1 if generation failed.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

# Ensure project root is on sys.path so we can import src.summarizer
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.summarizer.config import Settings  # noqa: E402
from src.summarizer.errors import SummarizerError  # noqa: E402
from src.summarizer.main import create_generator  # noqa: E402
from src.summarizer.schemas import SummaryType  # noqa: E402


async def summarize(transcript: str, prompt: str | None, summary_type: str, as_json: bool) -> int:
    """Generate and print one summary; return the process exit code."""
    generator = create_generator(Settings())

    try:
        if prompt:
            result = await generator.generate_summary(transcript, prompt)
        else:
            result = await generator.generate_preset_summary(transcript, summary_type)
    except SummarizerError as exc:
        print(f"Error [{exc.kind}]: {exc.message}", file=sys.stderr)
        return 1

    if as_json:
        print(result.model_dump_json(indent=2))
        return 0

    print(result.content)
    print()
    report = result.metadata.validation
    print(f"Words:   {result.metadata.word_count}/{result.metadata.word_limit}")
    print(f"Quality: {report.score}/100 ({'valid' if report.is_valid else 'needs review'})")
    for issue in report.issues:
        print(f"  - {issue}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarize a meeting transcript")
    parser.add_argument("--transcript", required=True, help="Path to a UTF-8 transcript file")
    parser.add_argument("--prompt", help="Free-text summarization instruction")
    parser.add_argument(
        "--type",
        default=SummaryType.GENERAL.value,
        choices=[t.value for t in SummaryType],
        help="Preset summary type, used when --prompt is not given",
    )
    parser.add_argument("--json", action="store_true", help="Print content and metadata as JSON")
    args = parser.parse_args()

    with open(args.transcript, encoding="utf-8") as f:
        transcript = f.read()

    sys.exit(asyncio.run(summarize(transcript, args.prompt, args.type, args.json)))


if __name__ == "__main__":
    main()
