"""Shared fixtures: a scripted LLM gateway and use-case builders."""

from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from text_summarizer.services.rate_limiter import RateLimiter
from text_summarizer.services.resilience import ResilientLlmInvoker, RetryPolicy
from text_summarizer.services.summarize_text import SummarizeTextUseCase

MODEL = "gpt-4o-mini"

_SENTENCE = (
    "Solar farms across the valley now supply most of the local grid during "
    "summer afternoons, and storage projects are smoothing the evening peak. "
)


def make_text(length: int) -> str:
    """Benign prose of exactly *length* characters."""
    repeated = _SENTENCE * (length // len(_SENTENCE) + 1)
    return repeated[:length]


class FakeLlmGateway:
    """Scripted ``LlmGateway``.

    ``outcomes`` is consumed one item per call: strings are returned,
    exceptions raised.  The last outcome repeats once the list runs out.
    """

    def __init__(self, *outcomes: str | Exception, delay: float = 0.0) -> None:
        self.outcomes = list(outcomes) or ["A short summary."]
        self.delay = delay
        self.calls: list[tuple[str, str]] = []
        self.cancelled = False

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


async def no_sleep(_: float) -> None:
    return None


@pytest.fixture
def gateway() -> FakeLlmGateway:
    return FakeLlmGateway("  A short summary of the solar report.  ")


@pytest.fixture
def make_use_case() -> Callable[..., SummarizeTextUseCase]:
    """Factory building a use case with fast retry settings."""

    def _build(
        gateway: FakeLlmGateway,
        *,
        permits: int = 10,
        max_attempts: int = 3,
        timeout_seconds: float = 5.0,
        max_input_length: int = 10_000,
    ) -> SummarizeTextUseCase:
        invoker = ResilientLlmInvoker(
            gateway=gateway,
            timeout_seconds=timeout_seconds,
            retry_policy=RetryPolicy(max_attempts=max_attempts, backoff_seconds=0.0),
            sleep=no_sleep,
        )
        return SummarizeTextUseCase(
            invoker=invoker,
            rate_limiter=RateLimiter(permits=permits, window_seconds=60.0),
            model=MODEL,
            max_input_length=max_input_length,
        )

    return _build
