"""FastAPI dependency injection wiring."""

from __future__ import annotations

from functools import lru_cache

import httpx

from text_summarizer.infrastructure.config import Settings, get_settings
from text_summarizer.infrastructure.openai_adapter import OpenAIAdapter
from text_summarizer.services.rate_limiter import RateLimiter
from text_summarizer.services.resilience import ResilientLlmInvoker, RetryPolicy
from text_summarizer.services.summarize_text import SummarizeTextUseCase

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None
_rate_limiter: RateLimiter | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter, _rate_limiter  # noqa: PLW0603

    settings = get_settings()
    # Must stay looser than the invoker's per-attempt deadline.
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.timeout_seconds + 5.0))
    _openai_adapter = OpenAIAdapter(
        api_key=settings.openai_api_key.get_secret_value(),
        model=settings.summarizer_model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
        base_url=settings.openai_base_url,
        http_client=_http_client,
    )
    _rate_limiter = RateLimiter(
        permits=settings.rate_limit.permits,
        window_seconds=settings.rate_limit.window_seconds,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter, _rate_limiter  # noqa: PLW0603

    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _rate_limiter = None


@lru_cache(maxsize=1)
def _settings() -> Settings:
    return get_settings()


def get_rate_limiter() -> RateLimiter:
    """Return the process-wide rate limiter."""
    assert _rate_limiter is not None, "startup() was not called"
    return _rate_limiter


def get_use_case() -> SummarizeTextUseCase:
    """Build the use case around the shared adapter and rate limiter."""
    settings = _settings()

    assert _openai_adapter is not None, "startup() was not called"

    invoker = ResilientLlmInvoker(
        gateway=_openai_adapter,
        timeout_seconds=settings.timeout_seconds,
        retry_policy=RetryPolicy(
            max_attempts=settings.retry.max_attempts,
            backoff_seconds=settings.retry.backoff_seconds,
        ),
    )
    return SummarizeTextUseCase(
        invoker=invoker,
        rate_limiter=get_rate_limiter(),
        model=settings.summarizer_model,
        max_input_length=settings.max_input_length,
    )
