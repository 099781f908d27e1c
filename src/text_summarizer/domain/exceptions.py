"""Domain exception hierarchy.

Every exception carries a stable :class:`ErrorCode` tag.  Inner layers raise
these; the interface layer dispatches on the tag to pick the HTTP status and
the error envelope.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable machine-readable error codes exposed to API clients."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    LLM_TIMEOUT = "LLM_TIMEOUT"
    SUMMARIZER_ERROR = "SUMMARIZER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SummarizerError(Exception):
    """Base exception for the entire application.

    Also raised directly for pipeline failures that have no narrower class,
    e.g. an empty summary from the LLM.
    """

    code: ErrorCode = ErrorCode.SUMMARIZER_ERROR


# ── Input validation ────────────────────────────────────────────────────────


class InvalidInputError(SummarizerError):
    """Content-level violation: size, encoding, injection or hidden characters."""

    code = ErrorCode.INVALID_INPUT


# ── Admission control ───────────────────────────────────────────────────────


class RateLimitExceededError(SummarizerError):
    """The shared rate limiter refused the request."""

    code = ErrorCode.RATE_LIMIT_EXCEEDED


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmTimeoutError(SummarizerError):
    """The LLM call timed out, or every retry attempt failed."""

    code = ErrorCode.LLM_TIMEOUT


class LlmError(SummarizerError):
    """Any error originating from the LLM provider."""
