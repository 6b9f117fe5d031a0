"""Error taxonomy for summary generation.

Only InvalidInput and the upstream ModelError family ever reach the caller.
InternalProcessingError is raised and recovered inside the post-processing
stages; it exists so that locally recovered failures are logged and counted
with the same stable ``kind`` vocabulary as propagated ones.

Exports:
    SummarizerError: Base class carrying a machine-checkable ``kind``.
    InvalidInput: User-correctable length/format violation.
    ModelError: Base class for upstream model failures.
    ModelUnavailable, QuotaExceeded, SafetyBlocked, InvalidCredentials.
    InternalProcessingError: A single rule or heuristic failed.
"""

from __future__ import annotations


class SummarizerError(Exception):
    """Base error with a stable kind and a human-readable message.

    Attributes:
        kind: Stable identifier callers can branch on.
        message: Human-readable description safe to show to end users.
    """

    kind = "summarizer_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class InvalidInput(SummarizerError):
    """Raised when the transcript or prompt violates its length bounds.

    Attributes:
        field: Name of the offending request field.
    """

    kind = "invalid_input"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


# ── Upstream Model Errors ────────────────────────────────────────────────────


class ModelError(SummarizerError):
    """Raised when the upstream model call fails.

    Upstream failures are surfaced to the caller as retriable service
    errors; configuration problems are not retriable.
    """

    kind = "model_error"
    retriable = True


class ModelUnavailable(ModelError):
    kind = "model_unavailable"

    def __init__(
        self,
        message: str = "AI service temporarily unavailable. Please try again later.",
    ) -> None:
        super().__init__(message)


class QuotaExceeded(ModelError):
    kind = "quota_exceeded"

    def __init__(
        self,
        message: str = "AI service quota exceeded. Please try again later.",
    ) -> None:
        super().__init__(message)


class SafetyBlocked(ModelError):
    kind = "safety_blocked"
    retriable = False

    def __init__(
        self,
        message: str = (
            "Content was blocked by AI safety filters. "
            "Please modify your transcript or prompt."
        ),
    ) -> None:
        super().__init__(message)


class InvalidCredentials(ModelError):
    kind = "invalid_credentials"
    retriable = False

    def __init__(
        self,
        message: str = "AI service configuration error. Please check API key.",
    ) -> None:
        super().__init__(message)


# ── Internal ─────────────────────────────────────────────────────────────────


class InternalProcessingError(SummarizerError):
    """A post-processing stage failed and was recovered by its fallback.

    Attributes:
        stage: Name of the stage or rule that failed.
        original_error: The underlying exception.
    """

    kind = "internal_processing_error"

    def __init__(self, stage: str, original_error: Exception) -> None:
        self.stage = stage
        self.original_error = original_error
        super().__init__(f"Stage '{stage}' failed: {original_error}")
