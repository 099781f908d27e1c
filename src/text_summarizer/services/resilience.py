"""Timeout and retry wrappers around the outbound LLM call.

``with_timeout`` and ``with_retry`` are plain higher-order functions over
``async`` callables; :class:`ResilientLlmInvoker` composes them explicitly so
the guarded call path reads top to bottom.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, ParamSpec, TypeVar

from text_summarizer.domain.exceptions import (
    InvalidInputError,
    LlmTimeoutError,
    SummarizerError,
)
from text_summarizer.domain.ports.llm_gateway import LlmGateway

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Exponential-backoff retry policy.

    ``max_attempts`` counts the first call, so ``3`` means one call plus two
    retries.  Exceptions in ``non_retryable`` propagate on the first failure.
    """

    max_attempts: int = 3
    backoff_seconds: float = 2.0
    multiplier: float = 2.0
    non_retryable: tuple[type[BaseException], ...] = field(
        default=(InvalidInputError,)
    )

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Backoff to sleep after the *attempt*-th failure (1-based)."""
        return self.backoff_seconds * self.multiplier ** (attempt - 1)


def with_timeout(
    seconds: float, fn: Callable[P, Awaitable[T]]
) -> Callable[P, Awaitable[T]]:
    """Bound every call of *fn* by *seconds*; the pending call is cancelled on expiry."""

    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return await asyncio.wait_for(fn(*args, **kwargs), timeout=seconds)
        except asyncio.TimeoutError as exc:
            raise LlmTimeoutError(
                f"LLM call did not complete within {seconds:g} seconds"
            ) from exc

    return wrapper


def with_retry(
    policy: RetryPolicy,
    fn: Callable[P, Awaitable[T]],
    *,
    sleep: Sleep = asyncio.sleep,
) -> Callable[P, Awaitable[T]]:
    """Retry *fn* per *policy*; exhaustion surfaces as :class:`LlmTimeoutError`."""

    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        last_exc: Exception | None = None
        for attempt in range(1, policy.max_attempts + 1):
            try:
                return await fn(*args, **kwargs)
            except policy.non_retryable:
                raise
            except Exception as exc:
                last_exc = exc
                if attempt == policy.max_attempts:
                    break
                delay = policy.delay_for(attempt)
                logger.warning(
                    "summarize_request retrying attempt=%d reason=%s delay=%.2fs",
                    attempt + 1,
                    exc,
                    delay,
                )
                await sleep(delay)

        logger.error(
            "All %d retry attempts exhausted: %s", policy.max_attempts, last_exc
        )
        raise LlmTimeoutError(
            "Service temporarily unavailable after multiple retry attempts: "
            f"{last_exc}"
        ) from last_exc

    return wrapper


class ResilientLlmInvoker:
    """Guarded entry point to the LLM gateway.

    Each attempt is bounded by ``timeout_seconds``; failed attempts are
    retried per ``retry_policy``.  An empty completion is a failure but is not
    retried.
    """

    def __init__(
        self,
        gateway: LlmGateway,
        timeout_seconds: float = 30.0,
        retry_policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._call = with_retry(
            retry_policy or RetryPolicy(),
            with_timeout(timeout_seconds, gateway.generate),
            sleep=sleep,
        )

    async def invoke(self, system_prompt: str, user_prompt: str) -> str:
        """Return the stripped completion text."""
        content = await self._call(system_prompt, user_prompt)
        if content is None or not content.strip():
            raise SummarizerError("LLM returned an empty summary")
        return content.strip()
