"""Pydantic v2 schemas for the summary generation domain.

Defines the request, quality report, metadata and result contracts. Every
instance is created fresh per request and never mutated afterwards, so the
result models are frozen.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.summarizer.errors import InvalidInput

# ── Request Bounds ───────────────────────────────────────────────────────────

MIN_TRANSCRIPT_LENGTH = 10
MAX_TRANSCRIPT_LENGTH = 50_000
MIN_PROMPT_LENGTH = 5
MAX_PROMPT_LENGTH = 1_000


# ── Enums ────────────────────────────────────────────────────────────────────


class SummaryType(str, Enum):
    """Preset summary styles with fixed instructions."""

    EXECUTIVE = "executive"
    COMPREHENSIVE = "comprehensive"
    ACTION_ITEMS = "action-items"
    SALES = "sales"
    PROJECT = "project"
    GENERAL = "general"


# ── Request ──────────────────────────────────────────────────────────────────


class GenerationRequest(BaseModel):
    """A validated transcript + instruction pair.

    Build instances through ``create`` so that length violations surface
    as InvalidInput instead of a pydantic ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    transcript_text: str
    user_prompt: str

    @classmethod
    def create(cls, transcript: object, prompt: object) -> GenerationRequest:
        """Strip and bounds-check raw inputs.

        Raises:
            InvalidInput: If either field is missing, not a string, or
                outside its length bounds.
        """
        if not transcript or not isinstance(transcript, str):
            raise InvalidInput("Valid transcript text is required", field="transcript_text")
        if not prompt or not isinstance(prompt, str):
            raise InvalidInput("Valid prompt is required", field="user_prompt")

        clean_transcript = transcript.strip()
        clean_prompt = prompt.strip()

        if len(clean_transcript) < MIN_TRANSCRIPT_LENGTH:
            raise InvalidInput(
                f"Transcript is too short (minimum {MIN_TRANSCRIPT_LENGTH} characters)",
                field="transcript_text",
            )
        if len(clean_transcript) > MAX_TRANSCRIPT_LENGTH:
            raise InvalidInput(
                f"Transcript is too long (maximum {MAX_TRANSCRIPT_LENGTH:,} characters)",
                field="transcript_text",
            )
        if len(clean_prompt) < MIN_PROMPT_LENGTH:
            raise InvalidInput(
                f"Prompt is too short (minimum {MIN_PROMPT_LENGTH} characters)",
                field="user_prompt",
            )
        if len(clean_prompt) > MAX_PROMPT_LENGTH:
            raise InvalidInput(
                f"Prompt is too long (maximum {MAX_PROMPT_LENGTH:,} characters)",
                field="user_prompt",
            )

        return cls(transcript_text=clean_transcript, user_prompt=clean_prompt)


# ── Quality ──────────────────────────────────────────────────────────────────


class QualityReport(BaseModel):
    """Deterministic quality assessment of a final summary."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100, description="Bounded 0-100 quality score")
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    is_valid: bool = True


# ── Result ───────────────────────────────────────────────────────────────────


class GenerationMetadata(BaseModel):
    """Everything the persistence layer records alongside a summary."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier used for the upstream call")
    generation_time_ms: int = Field(description="Elapsed time of the model call only")
    input_length: int
    output_length: int
    word_count: int
    word_limit: int
    prompt: str
    timestamp: datetime
    quality_score: int
    validation: QualityReport
    enhanced_features: list[str] = Field(default_factory=list)


class SummaryResult(BaseModel):
    """Final summary text plus its generation metadata."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    content: str
    metadata: GenerationMetadata
