"""Prometheus metrics for model calls and post-processing.

Provides:
- track_llm_call(): Async context manager for upstream model call metrics
- record_quality_score(): Histogram of final quality scores
- record_fallback(): Counter of locally recovered stage failures
"""

from __future__ import annotations

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from prometheus_client import Counter, Histogram

# ── LLM Metrics ──────────────────────────────────────────────────────────────

llm_requests_total = Counter(
    "summarizer_llm_requests_total",
    "Total LLM API requests",
    ["model", "status"],
)

llm_request_duration_seconds = Histogram(
    "summarizer_llm_request_duration_seconds",
    "LLM API request duration in seconds",
    ["model"],
    buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
)

llm_tokens_used_total = Counter(
    "summarizer_llm_tokens_used_total",
    "Total LLM tokens consumed",
    ["model", "token_type"],
)

# ── Pipeline Metrics ─────────────────────────────────────────────────────────

summary_quality_score = Histogram(
    "summarizer_quality_score",
    "Quality score of generated summaries",
    buckets=(20, 40, 60, 70, 80, 90, 100),
)

pipeline_fallbacks_total = Counter(
    "summarizer_pipeline_fallbacks_total",
    "Post-processing stage failures recovered by a fallback",
    ["stage"],
)


# ── Helpers ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def track_llm_call(model: str) -> AsyncGenerator[dict[str, Any], None]:
    """Context manager that tracks LLM call metrics.

    Usage:
        async with track_llm_call("gemini/gemini-1.5-flash") as tracker:
            response = await router.acompletion(...)
            tracker["prompt_tokens"] = response.usage.prompt_tokens
            tracker["completion_tokens"] = response.usage.completion_tokens

    Automatically records:
    - Duration in histogram
    - Request count (success/error)
    - Token usage (if set in tracker dict)

    Metrics are labelled with ``tracker["model"]`` when the caller sets it
    (the deployment that actually served the call), else with ``model``.
    """
    tracker: dict[str, Any] = {
        "prompt_tokens": 0,
        "completion_tokens": 0,
    }
    start_time = time.perf_counter()
    status = "success"

    try:
        yield tracker
    except Exception:
        status = "error"
        raise
    finally:
        duration = time.perf_counter() - start_time
        model = tracker.get("model") or model

        llm_requests_total.labels(model=model, status=status).inc()
        llm_request_duration_seconds.labels(model=model).observe(duration)

        if tracker.get("prompt_tokens"):
            llm_tokens_used_total.labels(
                model=model,
                token_type="prompt",
            ).inc(tracker["prompt_tokens"])

        if tracker.get("completion_tokens"):
            llm_tokens_used_total.labels(
                model=model,
                token_type="completion",
            ).inc(tracker["completion_tokens"])


def record_quality_score(score: int) -> None:
    summary_quality_score.observe(score)


def record_fallback(stage: str) -> None:
    pipeline_fallbacks_total.labels(stage=stage).inc()
