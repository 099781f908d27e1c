"""Pydantic request / response DTOs for the API boundary.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from text_summarizer.domain.entities import SummarizeRequest, SummarizeResponse, SummaryStyle

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummarizeRequestBody(BaseModel):
    """Request body for ``POST /api/v1/summarize``."""

    model_config = _CAMEL

    text: str = Field(
        min_length=100,
        max_length=10_000,
        description="The text to summarize (100-10000 characters).",
    )
    max_length: int | None = Field(
        default=None,
        ge=50,
        le=1000,
        description="Approximate summary length in words.",
    )
    summary_style: SummaryStyle | None = Field(
        default=None,
        description="Summary style; CONCISE when omitted.",
    )

    @field_validator("text")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "Text cannot be empty or blank."
            raise ValueError(msg)
        return v

    def to_domain(self) -> SummarizeRequest:
        return SummarizeRequest(
            text=self.text,
            max_length=self.max_length,
            summary_style=self.summary_style,
        )


class SummarizeResponseBody(BaseModel):
    """Successful response from ``POST /api/v1/summarize``."""

    model_config = _CAMEL

    summary: str
    input_length: int
    summary_length: int
    model: str
    processing_time_ms: int = Field(ge=0)

    @classmethod
    def from_domain(cls, result: SummarizeResponse) -> SummarizeResponseBody:
        return cls(
            summary=result.summary,
            input_length=result.input_length,
            summary_length=result.summary_length,
            model=result.model,
            processing_time_ms=result.processing_time_ms,
        )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    model_config = _CAMEL

    error_code: str
    message: str
    timestamp: datetime
