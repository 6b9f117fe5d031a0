"""Process bootstrap for the summary generator.

The caller loads settings and passes them in. This module configures logging,
builds the model client exactly once, then hands the client to a
SummaryGenerator. Callers (an HTTP layer, a worker, the CLI script) create
one generator at startup and share it.
"""

from __future__ import annotations

import structlog

from src.summarizer.config import Settings
from src.summarizer.generator import SummaryGenerator
from src.summarizer.observability.logging_config import configure_structlog
from src.summarizer.services.llm import build_model_client


def create_generator(settings: Settings) -> SummaryGenerator:
    """Build a fully wired SummaryGenerator from explicitly loaded settings."""
    configure_structlog(settings)

    model_client = build_model_client(settings)
    generator = SummaryGenerator(
        model_client,
        default_word_limit=settings.DEFAULT_WORD_LIMIT,
    )

    structlog.get_logger(__name__).info(
        "summary_generator_ready",
        environment=settings.ENVIRONMENT.value,
        model=model_client.model_name,
        configured=model_client.configured,
    )
    return generator
