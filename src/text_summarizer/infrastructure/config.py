"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrySettings(BaseModel):
    """Retry policy for the outbound LLM call (``RETRY__*`` env vars)."""

    max_attempts: int = Field(default=3, ge=1)
    backoff_seconds: float = Field(default=2.0, ge=0)


class RateLimitSettings(BaseModel):
    """Global admission window (``RATE_LIMIT__*`` env vars)."""

    permits: int = Field(default=10, ge=1)
    window_seconds: float = Field(default=60.0, gt=0)


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    openai_api_key: SecretStr
    openai_base_url: str | None = None
    summarizer_model: str = "gpt-4o-mini"
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=500, ge=1)
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_input_length: int = Field(default=10_000, ge=100)
    retry: RetrySettings = RetrySettings()
    rate_limit: RateLimitSettings = RateLimitSettings()
    cors_allowed_origins: str = "http://localhost:3000,http://localhost:8080"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def cors_origins(self) -> list[str]:
        """``cors_allowed_origins`` split into a clean list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
