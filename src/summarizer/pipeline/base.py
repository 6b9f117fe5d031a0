"""Shared helpers for the post-processing stages.

run_guarded is the single place where stage failures are recovered: the
failure is wrapped in InternalProcessingError for logging, counted, and the
stage's fallback value is returned instead. Nothing raised inside a stage
ever reaches the orchestrator.
"""

from __future__ import annotations

from typing import Callable, TypeVar

import structlog

from src.summarizer.errors import InternalProcessingError
from src.summarizer.observability.metrics import record_fallback

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def word_count(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def run_guarded(
    stage: str,
    func: Callable[..., T],
    *args: object,
    fallback: Callable[[], T],
) -> T:
    """Call ``func(*args)``; on any exception log it and return ``fallback()``.

    Args:
        stage: Stage or rule name used in logs and the fallback counter.
        func: The stage implementation.
        *args: Positional arguments for ``func``.
        fallback: Zero-argument callable producing the recovery value.

    Returns:
        The stage result, or the fallback result if the stage raised.
    """
    try:
        return func(*args)
    except Exception as exc:
        error = InternalProcessingError(stage, exc)
        logger.warning(
            "pipeline_stage_failed",
            stage=stage,
            kind=error.kind,
            error=str(exc),
            exc_info=True,
        )
        record_fallback(stage)
        return fallback()
