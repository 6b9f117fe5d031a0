"""Observability package: structlog configuration and Prometheus metrics.

Provides:
- configure_structlog: Console output in development, JSON in production
- track_llm_call: Context manager recording model call count/duration/tokens
- record_quality_score / record_fallback: Post-processing metrics
"""
