"""SummaryGenerator -- transcript + instruction in, structured summary out.

Sequence per request:
1. Validate the request bounds (InvalidInput on violation)
2. Compose the instruction and extract the word limit
3. One awaited call to the injected model client (the only timed step)
4. normalize -> structure -> highlight -> enforce_word_limit -> validate
5. Assemble GenerationMetadata

Steps 4-5 are synchronous and never raise; only InvalidInput and the
client's ModelError family propagate. The generator keeps no per-request
state, so one instance can serve concurrent requests.

Exports:
    SummaryGenerator: Orchestrates one summary generation.
    postprocess: The pure post-processing chain (raw text -> final text + report).
"""

from __future__ import annotations

import time
from datetime import datetime, timezone

import structlog

from src.summarizer.errors import ModelError, ModelUnavailable, SummarizerError
from src.summarizer.observability.metrics import record_quality_score
from src.summarizer.pipeline import (
    DEFAULT_WORD_LIMIT,
    QualityValidator,
    compose_prompt,
    enforce_word_limit,
    extract_word_limit,
    highlight,
    normalize,
    resolve_preset_prompt,
    structure,
)
from src.summarizer.pipeline.base import word_count
from src.summarizer.schemas import (
    GenerationMetadata,
    GenerationRequest,
    QualityReport,
    SummaryResult,
    SummaryType,
)
from src.summarizer.services.llm import ModelClient

logger = structlog.get_logger(__name__)


ENHANCED_FEATURES = [
    "Advanced prompt engineering",
    "Intelligent content structuring",
    "Professional formatting",
    "Quality validation",
    "Smart highlighting",
    "Comprehensive analysis",
]

CONNECTION_CHECK_TRANSCRIPT = (
    "This is a test meeting transcript to verify the AI service is working correctly."
)
CONNECTION_CHECK_PROMPT = "Summarize this test transcript in one sentence."


def postprocess(
    raw_output: str,
    transcript: str,
    word_limit: int = DEFAULT_WORD_LIMIT,
    validator: QualityValidator | None = None,
) -> tuple[str, QualityReport]:
    """Turn raw model output into the final summary and its quality report.

    Pure and deterministic: identical inputs give identical outputs.

    Args:
        raw_output: Untrusted model text.
        transcript: The transcript the summary was generated from.
        word_limit: Maximum words in the final summary.
        validator: Scoring engine; a default QualityValidator if omitted.

    Returns:
        Tuple of (final summary text, quality report).
    """
    validator = validator or QualityValidator()

    normalized = normalize(raw_output)
    structured = structure(normalized)
    highlighted = highlight(structured)
    final = enforce_word_limit(highlighted, word_limit).strip()
    report = validator.validate(final, transcript)

    return final, report


class SummaryGenerator:
    """Generates length-bounded, structured summaries from transcripts.

    Args:
        model_client: Upstream model client, constructed once at process
            start (see build_model_client) and shared.
        default_word_limit: Limit used when the prompt names none.
        validator: Optional QualityValidator override.
    """

    def __init__(
        self,
        model_client: ModelClient,
        *,
        default_word_limit: int = DEFAULT_WORD_LIMIT,
        validator: QualityValidator | None = None,
    ) -> None:
        self._model_client = model_client
        self._default_word_limit = default_word_limit
        self._validator = validator or QualityValidator()

    async def generate_summary(self, transcript: str, prompt: str) -> SummaryResult:
        """Generate a summary for one transcript/instruction pair.

        Args:
            transcript: Transcript text (10-50,000 characters after stripping).
            prompt: User instruction (5-1,000 characters after stripping).

        Returns:
            SummaryResult with final content and GenerationMetadata.

        Raises:
            InvalidInput: Request bounds violated.
            ModelError: Upstream model failure (ModelUnavailable,
                QuotaExceeded, SafetyBlocked, InvalidCredentials).
        """
        request = GenerationRequest.create(transcript, prompt)
        word_limit = extract_word_limit(request.user_prompt, self._default_word_limit)
        instruction = compose_prompt(
            request.user_prompt,
            request.transcript_text,
            self._default_word_limit,
        )

        logger.info(
            "generating_summary",
            transcript_length=len(request.transcript_text),
            prompt_length=len(request.user_prompt),
            word_limit=word_limit,
        )

        start_time = time.perf_counter()
        try:
            reply = await self._model_client.call(instruction)
        except ModelError as exc:
            logger.error(
                "summary_generation_failed",
                kind=exc.kind,
                error=exc.message,
                generation_time_ms=_elapsed_ms(start_time),
            )
            raise
        except Exception as exc:
            logger.error(
                "summary_generation_failed",
                kind=ModelUnavailable.kind,
                error=str(exc),
                generation_time_ms=_elapsed_ms(start_time),
                exc_info=True,
            )
            raise ModelUnavailable() from exc
        generation_time_ms = _elapsed_ms(start_time)

        content, report = postprocess(
            reply.content,
            request.transcript_text,
            word_limit,
            self._validator,
        )
        record_quality_score(report.score)

        metadata = GenerationMetadata(
            model=reply.model,
            generation_time_ms=generation_time_ms,
            input_length=len(request.transcript_text),
            output_length=len(content),
            word_count=word_count(content),
            word_limit=word_limit,
            prompt=request.user_prompt,
            timestamp=datetime.now(timezone.utc),
            quality_score=report.score,
            validation=report,
            enhanced_features=list(ENHANCED_FEATURES),
        )

        logger.info(
            "summary_generated",
            model=metadata.model,
            generation_time_ms=generation_time_ms,
            output_length=metadata.output_length,
            word_count=metadata.word_count,
            quality_score=report.score,
            validation_issues=len(report.issues),
        )

        return SummaryResult(success=True, content=content, metadata=metadata)

    async def generate_preset_summary(
        self,
        transcript: str,
        summary_type: SummaryType | str = SummaryType.GENERAL,
        custom_prompt: str = "",
    ) -> SummaryResult:
        """Generate a summary using one of the preset instructions.

        ``custom_prompt`` is used only for the GENERAL type.
        """
        prompt = resolve_preset_prompt(summary_type, custom_prompt)
        return await self.generate_summary(transcript, prompt)

    async def check_connection(self) -> bool:
        """Run a tiny end-to-end generation; True if it produced content."""
        try:
            result = await self.generate_summary(
                CONNECTION_CHECK_TRANSCRIPT,
                CONNECTION_CHECK_PROMPT,
            )
        except SummarizerError as exc:
            logger.warning("connection_check_failed", kind=exc.kind, error=exc.message)
            return False
        return result.success and len(result.content) > 0

    def get_status(self) -> dict:
        """Model client status plus the generator's own configuration."""
        get_client_status = getattr(self._model_client, "get_status", None)
        status = get_client_status() if callable(get_client_status) else {
            "model": self._model_client.model_name,
        }
        return {
            **status,
            "default_word_limit": self._default_word_limit,
            "summary_types": [t.value for t in SummaryType],
            "enhanced_features": list(ENHANCED_FEATURES),
        }


def _elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)
