"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from text_summarizer.interface.dependencies import get_use_case
from text_summarizer.interface.schemas import (
    ErrorResponse,
    SummarizeRequestBody,
    SummarizeResponseBody,
)
from text_summarizer.services.summarize_text import SummarizeTextUseCase

router = APIRouter(prefix="/api/v1")


@router.post(
    "/summarize",
    response_model=SummarizeResponseBody,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or unsafe input"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "Summarization failed"},
        503: {"model": ErrorResponse, "description": "LLM temporarily unavailable"},
    },
)
async def summarize(
    body: SummarizeRequestBody,
    use_case: SummarizeTextUseCase = Depends(get_use_case),
) -> SummarizeResponseBody:
    """Summarise free-form text with the configured LLM."""
    result = await use_case.execute(body.to_domain())
    return SummarizeResponseBody.from_domain(result)
