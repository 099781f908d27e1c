"""Summarize-text use case — the guarded orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the rate limiter, the resilient LLM invoker and the pure service modules; the
interface layer injects concrete collaborators at runtime.

Stages run in a fixed order and each either advances or raises:

    rate limit → size → encoding → sanitize → strip HTML → style →
    prompt → LLM → response check
"""

from __future__ import annotations

import logging
import time
import uuid

from text_summarizer.domain.entities import (
    SummarizeRequest,
    SummarizeResponse,
    SummaryStyle,
)
from text_summarizer.domain.exceptions import SummarizerError
from text_summarizer.services import input_sanitizer, input_validator
from text_summarizer.services.input_validator import DEFAULT_MAX_INPUT_LENGTH
from text_summarizer.services.prompt_builder import SYSTEM_PROMPT, build_user_prompt
from text_summarizer.services.rate_limiter import RateLimiter
from text_summarizer.services.resilience import ResilientLlmInvoker

logger = logging.getLogger(__name__)

DEFAULT_STYLE = SummaryStyle.CONCISE


class SummarizeTextUseCase:
    """Orchestrates the request → summary pipeline.

    Parameters
    ----------
    invoker:
        Timeout/retry-guarded access to the LLM gateway.
    rate_limiter:
        The process-wide limiter shared by all requests.
    model:
        Configured model name, echoed in the response.
    max_input_length:
        Upper bound on input characters, shared by validator and sanitizer.
    """

    def __init__(
        self,
        invoker: ResilientLlmInvoker,
        rate_limiter: RateLimiter,
        model: str,
        max_input_length: int = DEFAULT_MAX_INPUT_LENGTH,
    ) -> None:
        self._invoker = invoker
        self._limiter = rate_limiter
        self._model = model
        self._max_input_length = max_input_length

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, request: SummarizeRequest) -> SummarizeResponse:
        """Run the full pipeline and return the summary response."""
        request_id = uuid.uuid4().hex[:8]
        start = time.perf_counter()
        logger.info(
            "summarize_request initiated requestId=%s inputLength=%d style=%s maxLength=%s",
            request_id,
            len(request.text),
            request.summary_style.value if request.summary_style else None,
            request.max_length,
        )

        try:
            summary = await self._run_pipeline(request)
        except SummarizerError as exc:
            self._log_failure(request_id, start, exc)
            raise
        except Exception as exc:
            self._log_failure(request_id, start, exc)
            raise SummarizerError(f"Failed to generate summary: {exc}") from exc

        processing_ms = _elapsed_ms(start)
        logger.info(
            "summarize_request completed requestId=%s summaryLength=%d "
            "processingTimeMs=%d model=%s",
            request_id,
            len(summary),
            processing_ms,
            self._model,
        )
        return SummarizeResponse(
            summary=summary,
            input_length=len(request.text),
            summary_length=len(summary),
            model=self._model,
            processing_time_ms=processing_ms,
        )

    # ── Pipeline ────────────────────────────────────────────────────────

    async def _run_pipeline(self, request: SummarizeRequest) -> str:
        # 1. Admission control
        self._limiter.admit()

        # 2. Size, then encoding, on the raw text
        input_validator.validate_size(request.text, self._max_input_length)
        input_validator.validate_encoding(request.text)

        # 3. Prompt-injection defence
        sanitized = input_sanitizer.sanitize(request.text, self._max_input_length)
        logger.debug("Input sanitization and validation passed")

        # 4. HTML stripping
        cleaned = input_sanitizer.strip_html_tags(sanitized)
        if cleaned != sanitized:
            logger.info("HTML tags were stripped from input")

        # 5. Style resolution
        style = request.summary_style or DEFAULT_STYLE

        # 6. Prompts
        user_prompt = build_user_prompt(cleaned, style, request.max_length)

        # 7. LLM call (timeout + retry); an empty result raises here
        logger.debug("Calling LLM with model: %s", self._model)
        return await self._invoker.invoke(SYSTEM_PROMPT, user_prompt)

    @staticmethod
    def _log_failure(request_id: str, start: float, exc: Exception) -> None:
        error_type = exc.code.value if isinstance(exc, SummarizerError) else type(exc).__name__
        logger.error(
            "summarize_request failed requestId=%s errorType=%s processingTimeMs=%d "
            "errorMessage=%s",
            request_id,
            error_type,
            _elapsed_ms(start),
            exc,
            exc_info=not isinstance(exc, SummarizerError),
        )


def _elapsed_ms(start: float) -> int:
    return max(int((time.perf_counter() - start) * 1000), 0)
