"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the standard
``{"errorCode": "...", "message": "...", "timestamp": "..."}`` envelope.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from text_summarizer.domain.exceptions import (
    ErrorCode,
    InvalidInputError,
    LlmTimeoutError,
    RateLimitExceededError,
    SummarizerError,
)
from text_summarizer.interface.schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Starlette resolves handlers along the MRO, so subclasses win over the base.
_EXCEPTION_STATUS: list[tuple[type[SummarizerError], int]] = [
    (InvalidInputError, 400),
    (RateLimitExceededError, 429),
    (LlmTimeoutError, 503),
    (SummarizerError, 500),
]

# Codes whose detail stays in the server log only.
_PUBLIC_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.LLM_TIMEOUT: (
        "The summarization service is temporarily unavailable. Please try again later."
    ),
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred. Please try again later.",
}

# Also applied by the app middleware; 500s from the catch-all bypass it.
SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

# pydantic-core rejects lone surrogates before the use case can see them.
_INVALID_TEXT_ENCODING = "string_unicode"


def _error_json(
    status_code: int,
    code: ErrorCode,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=code.value,
        message=message,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                assert isinstance(exc, SummarizerError)
                if status_code >= 500:
                    logger.error("%s: %s", type(exc).__name__, exc)
                else:
                    logger.warning("%s: %s", type(exc).__name__, exc)
                message = _PUBLIC_MESSAGES.get(exc.code, str(exc))
                return _error_json(status_code, exc.code, message)

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        if any(
            err.get("type") == _INVALID_TEXT_ENCODING and "text" in err.get("loc", ())
            for err in exc.errors()
        ):
            logger.warning("Input text contains invalid UTF-8 characters")
            return _error_json(
                400,
                ErrorCode.INVALID_INPUT,
                "Input text contains invalid UTF-8 characters",
            )

        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []) if p != "body")
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        message = "Validation failed: " + "; ".join(messages) if messages else "Validation failed"
        logger.warning("validation_error %s", message)
        return _error_json(400, ErrorCode.VALIDATION_ERROR, message)

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(
            500,
            ErrorCode.INTERNAL_ERROR,
            _PUBLIC_MESSAGES[ErrorCode.INTERNAL_ERROR],
            headers=SECURITY_HEADERS,
        )
