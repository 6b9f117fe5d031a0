"""Application configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    # LLM Providers
    GEMINI_API_KEY: str = ""
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""

    # Summary model routing (LiteLLM model identifiers)
    SUMMARY_MODEL: str = "gemini/gemini-1.5-flash"
    FALLBACK_MODEL: str = ""  # Optional second model group, e.g. "openai/gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.3
    LLM_MAX_TOKENS: int = 8192
    LLM_TIMEOUT: float | None = None  # Seconds; unset leaves deadlines to the caller
    LLM_MAX_RETRIES: int = 0  # Retry policy belongs to the calling layer

    # Summary post-processing
    DEFAULT_WORD_LIMIT: int = 300

    def get_api_key(self, model: str) -> str:
        """Return the provider API key matching a LiteLLM model identifier.

        The provider is the prefix before the first slash ("gemini/...",
        "openai/...", "anthropic/..."). Unknown providers get an empty key.
        """
        provider = model.split("/", 1)[0].lower() if "/" in model else ""
        if provider == "gemini":
            return self.GEMINI_API_KEY
        if provider == "openai":
            return self.OPENAI_API_KEY
        if provider == "anthropic":
            return self.ANTHROPIC_API_KEY
        return ""
