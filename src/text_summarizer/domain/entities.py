"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SummaryStyle(str, Enum):
    """Supported summary styles."""

    CONCISE = "CONCISE"
    BULLET = "BULLET"
    EXECUTIVE = "EXECUTIVE"

    @property
    def prompt_suffix(self) -> str:
        """Instruction fragment describing the style to the model."""
        return _STYLE_SUFFIXES[self]


_STYLE_SUFFIXES: dict[SummaryStyle, str] = {
    SummaryStyle.CONCISE: "Provide a brief, direct summary focusing on key points",
    SummaryStyle.BULLET: "Provide a bulleted list summary with clear, concise points",
    SummaryStyle.EXECUTIVE: (
        "Provide an executive-level summary with strategic implications, "
        "focusing on key insights and business impact"
    ),
}


@dataclass(frozen=True, slots=True)
class SummarizeRequest:
    """A single summarisation request as seen by the use case."""

    text: str
    max_length: int | None = None
    summary_style: SummaryStyle | None = None


@dataclass(frozen=True, slots=True)
class SummarizeResponse:
    """The final output returned to the caller."""

    summary: str
    input_length: int
    summary_length: int
    model: str
    processing_time_ms: int
