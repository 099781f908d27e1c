"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from text_summarizer.infrastructure.config import Settings, get_settings
from text_summarizer.interface.dependencies import get_rate_limiter, shutdown, startup
from text_summarizer.interface.error_handlers import SECURITY_HEADERS, register_error_handlers
from text_summarizer.interface.routes import router
from text_summarizer.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup / shutdown of shared resources."""
    await startup()
    yield
    await shutdown()


def _configure_cors(app: FastAPI, origins: list[str]) -> None:
    if "*" in origins:
        logger.warning("CORS configured to allow all origins - not recommended for production")
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
        return

    logger.info("CORS configured for origins: %s", origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=3600,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and wire the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="AI Text Summarizer",
        version="1.0.0",
        description=(
            "Accepts free-form text and returns an AI-generated summary. "
            "Input is validated and screened for prompt injection before it "
            "reaches the LLM; the LLM call is rate limited, retried and "
            "bounded by a timeout."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    _configure_cors(app, settings.cors_origins)
    app.include_router(router)

    @app.middleware("http")
    async def security_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response

    # ── Health checks ───────────────────────────────────────────────────

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health/details", include_in_schema=False)
    async def health_details(
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> dict[str, Any]:
        window = limiter.snapshot()
        return {
            "status": "ok",
            "llm": {
                "model": settings.summarizer_model,
                "temperature": settings.temperature,
                "maxTokens": settings.max_tokens,
                "timeoutMs": int(settings.timeout_seconds * 1000),
            },
            "resilience": {
                "retry": {
                    "maxAttempts": settings.retry.max_attempts,
                    "backoffMs": int(settings.retry.backoff_seconds * 1000),
                },
                "rateLimiter": {
                    "permits": window.permits,
                    "windowSeconds": window.window_seconds,
                    "availablePermits": window.available_permits,
                    "secondsUntilReset": round(window.seconds_until_reset, 3),
                },
            },
        }

    return app
