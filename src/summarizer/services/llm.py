"""Summary model client via LiteLLM Router.

Provides:
- ModelClient: The protocol the summary generator depends on
- LiteLLMModelClient: Router-backed client mapping provider failures onto
  the typed ModelError taxonomy
- build_model_client: Explicit one-time construction from Settings,
  called by the process bootstrap and injected into the generator

The client holds only read-only configuration after construction, so one
instance can serve concurrent requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

import litellm
import structlog
from litellm import Router

from src.summarizer.config import Settings
from src.summarizer.errors import (
    InvalidCredentials,
    ModelError,
    ModelUnavailable,
    QuotaExceeded,
    SafetyBlocked,
)
from src.summarizer.observability.metrics import track_llm_call

logger = structlog.get_logger(__name__)

SUMMARY_MODEL_GROUP = "summary"
FALLBACK_MODEL_GROUP = "summary-fallback"

CAPABILITIES = [
    "Advanced summarization",
    "Action item extraction",
    "Decision tracking",
    "Professional formatting",
]


@dataclass(frozen=True)
class ModelReply:
    """Raw model output and the provider model that actually served it."""

    content: str
    model: str


class ModelClient(Protocol):
    """Upstream text model: one instruction in, raw text out."""

    model_name: str

    async def call(self, instruction_text: str) -> ModelReply:
        """Return raw model output and the serving model.

        Raises:
            InvalidCredentials, QuotaExceeded, SafetyBlocked, ModelUnavailable.
        """
        ...


# ── Error Mapping ─────────────────────────────────────────────────────────────


def classify_model_error(exc: Exception) -> ModelError:
    """Map a provider exception onto the typed ModelError taxonomy.

    Typed LiteLLM exceptions are matched first; anything else is classified
    by its message, and defaults to ModelUnavailable.
    """
    if isinstance(exc, ModelError):
        return exc
    if isinstance(exc, litellm.AuthenticationError):
        return InvalidCredentials()
    if isinstance(exc, litellm.RateLimitError):
        return QuotaExceeded()
    if isinstance(exc, litellm.ContentPolicyViolationError):
        return SafetyBlocked()

    message = str(exc).lower()
    if "api key" in message or "api_key" in message:
        return InvalidCredentials()
    if "quota" in message or "rate limit" in message:
        return QuotaExceeded()
    if "safety" in message or "blocked" in message:
        return SafetyBlocked()
    return ModelUnavailable()


# ── LiteLLM Client ────────────────────────────────────────────────────────────


class LiteLLMModelClient:
    """ModelClient backed by a LiteLLM Router.

    Args:
        router: Configured Router with a SUMMARY_MODEL_GROUP entry, or None
            when no API key is configured (every call then raises
            InvalidCredentials).
        model_name: Configured primary model, reported in status and used
            when a response does not name its serving model.
        temperature: Sampling temperature for every call.
        max_tokens: Maximum tokens in the response.
    """

    def __init__(
        self,
        router: Router | None,
        model_name: str,
        *,
        temperature: float = 0.3,
        max_tokens: int = 8192,
    ) -> None:
        self._router = router
        self.model_name = model_name
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def configured(self) -> bool:
        return self._router is not None

    async def call(self, instruction_text: str) -> ModelReply:
        """Send the instruction as a single user message and return the reply.

        The reply names the deployment that answered, which is the fallback
        model when the Router failed over.

        Raises:
            InvalidCredentials: No API key configured or key rejected.
            QuotaExceeded: Provider rate limit or quota hit.
            SafetyBlocked: Provider content filter stopped the response.
            ModelUnavailable: Any other provider failure or empty output.
        """
        if self._router is None:
            raise InvalidCredentials()

        async with track_llm_call(self.model_name) as tracker:
            try:
                response = await self._router.acompletion(
                    model=SUMMARY_MODEL_GROUP,
                    messages=[{"role": "user", "content": instruction_text}],
                    max_tokens=self._max_tokens,
                    temperature=self._temperature,
                )
            except Exception as exc:
                error = classify_model_error(exc)
                logger.warning(
                    "model_call_failed",
                    model=self.model_name,
                    kind=error.kind,
                    error=str(exc),
                )
                raise error from exc

            served_model = getattr(response, "model", None) or self.model_name
            tracker["model"] = served_model

            usage = getattr(response, "usage", None)
            if usage:
                tracker["prompt_tokens"] = usage.prompt_tokens
                tracker["completion_tokens"] = usage.completion_tokens

            choice = response.choices[0]
            if getattr(choice, "finish_reason", None) == "content_filter":
                raise SafetyBlocked()

            content = choice.message.content
            if not content or not content.strip():
                raise ModelUnavailable("AI service returned an empty response. Please try again later.")

        return ModelReply(content=content, model=served_model)

    def get_status(self) -> dict:
        """Service status and configuration snapshot."""
        return {
            "service": "LiteLLM Router",
            "model": self.model_name,
            "configured": self.configured,
            "capabilities": list(CAPABILITIES),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }


# ── Construction ──────────────────────────────────────────────────────────────


def build_model_client(settings: Settings) -> LiteLLMModelClient:
    """Build the model client once at process start.

    SUMMARY_MODEL is the only deployment of the summary model group.
    FALLBACK_MODEL (if set and keyed) gets its own group, which the Router
    tries only after the summary group fails. A keyed fallback with an
    unkeyed primary takes over the summary group itself.

    No request timeout is set unless LLM_TIMEOUT is configured; deadlines
    and cancellation are left to the caller.
    """
    model_list = []
    fallbacks = []

    primary_key = settings.get_api_key(settings.SUMMARY_MODEL)
    if primary_key:
        model_list.append({
            "model_name": SUMMARY_MODEL_GROUP,
            "litellm_params": {
                "model": settings.SUMMARY_MODEL,
                "api_key": primary_key,
            },
        })
    else:
        logger.warning("model_api_key_missing", model=settings.SUMMARY_MODEL)

    if settings.FALLBACK_MODEL:
        fallback_key = settings.get_api_key(settings.FALLBACK_MODEL)
        if not fallback_key:
            logger.warning("model_api_key_missing", model=settings.FALLBACK_MODEL)
        elif model_list:
            model_list.append({
                "model_name": FALLBACK_MODEL_GROUP,
                "litellm_params": {
                    "model": settings.FALLBACK_MODEL,
                    "api_key": fallback_key,
                },
            })
            fallbacks.append({SUMMARY_MODEL_GROUP: [FALLBACK_MODEL_GROUP]})
        else:
            model_list.append({
                "model_name": SUMMARY_MODEL_GROUP,
                "litellm_params": {
                    "model": settings.FALLBACK_MODEL,
                    "api_key": fallback_key,
                },
            })

    if not model_list:
        logger.warning("No LLM API keys configured -- summary model will be unavailable")
        router = None
    else:
        router_kwargs = {
            "model_list": model_list,
            "num_retries": settings.LLM_MAX_RETRIES,
        }
        if fallbacks:
            router_kwargs["fallbacks"] = fallbacks
        if settings.LLM_TIMEOUT is not None:
            router_kwargs["timeout"] = settings.LLM_TIMEOUT
        router = Router(**router_kwargs)

    logger.info(
        "model_client_initialized",
        model=settings.SUMMARY_MODEL,
        deployments=len(model_list),
        fallback=bool(fallbacks),
    )
    return LiteLLMModelClient(
        router,
        settings.SUMMARY_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
    )
