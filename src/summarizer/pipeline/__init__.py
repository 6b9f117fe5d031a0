"""Post-processing pipeline for raw model output.

Stages run in a fixed order: normalize -> structure -> highlight ->
enforce_word_limit -> QualityValidator.validate. Every stage is a pure,
synchronous string transform that recovers from its own failures.
"""

from src.summarizer.pipeline.highlighter import highlight
from src.summarizer.pipeline.normalizer import RULES, normalize
from src.summarizer.pipeline.prompts import (
    compose_prompt,
    extract_word_limit,
    resolve_preset_prompt,
)
from src.summarizer.pipeline.quality import QualityValidator
from src.summarizer.pipeline.structurer import structure
from src.summarizer.pipeline.word_limit import DEFAULT_WORD_LIMIT, enforce_word_limit

__all__ = [
    "DEFAULT_WORD_LIMIT",
    "QualityValidator",
    "RULES",
    "compose_prompt",
    "enforce_word_limit",
    "extract_word_limit",
    "highlight",
    "normalize",
    "resolve_preset_prompt",
    "structure",
]
