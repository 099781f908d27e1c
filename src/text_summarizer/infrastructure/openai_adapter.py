"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging

import httpx
from openai import APIError, AsyncOpenAI, AuthenticationError, RateLimitError

from text_summarizer.domain.exceptions import LlmError

logger = logging.getLogger(__name__)


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API.

    SDK-level retries are disabled; retry and timeout are owned by
    :class:`~text_summarizer.services.resilience.ResilientLlmInvoker`.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        temperature: float = 0.3,
        max_tokens: int = 500,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            http_client=http_client,
            max_retries=0,
        )
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system + user prompt and return the completion text.

        Returns an empty string when the provider sends no content; judging
        that as a failure is the caller's job.
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except AuthenticationError as exc:
            raise LlmError(
                "Invalid OpenAI API key. "
                "Set a valid key in the OPENAI_API_KEY environment variable."
            ) from exc

        except RateLimitError as exc:
            detail = str(exc)
            logger.error("OpenAI RateLimitError: %s", detail)
            raise LlmError(f"OpenAI rate limit / quota error: {detail}") from exc

        except APIError as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
