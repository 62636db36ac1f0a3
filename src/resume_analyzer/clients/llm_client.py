"""Claude API wrapper with async support."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import anthropic

logger = logging.getLogger(__name__)

# USD per 1M tokens; models not listed are reported as free
MODEL_PRICING: dict[str, tuple[float, float]] = {
    "claude-haiku-4-5-20251001": (1.00, 5.00),
    "claude-sonnet-4-5-20250929": (3.00, 15.00),
    "claude-opus-4-1-20250805": (15.00, 75.00),
}


class MissingAPIKeyError(RuntimeError):
    """Raised when a call is attempted without an API credential."""


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client.

    The credential is injected here rather than read from the environment by
    the SDK, so a missing key is reported at call time without touching the
    network. Each call is attempted exactly once.
    """

    def __init__(self, api_key: str | None = None, timeout: float | None = None):
        self.api_key = api_key
        self.timeout = timeout
        self._client: anthropic.AsyncAnthropic | None = None
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if not self.api_key:
            raise MissingAPIKeyError("ANTHROPIC_API_KEY is not configured.")
        if self._client is None:
            kwargs: dict = {"api_key": self.api_key, "max_retries": 0}
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = anthropic.AsyncAnthropic(**kwargs)
        return self._client

    async def _call_api(
        self,
        prompt: str,
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        messages = [{"role": "user", "content": prompt}]
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system
        return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        model: str = "claude-sonnet-4-5-20250929",
        temperature: float = 0.7,
        max_tokens: int = 8192,
    ) -> LLMResponse:
        """Send a prompt to Claude and return the text response with usage."""
        if not self.api_key:
            raise MissingAPIKeyError("ANTHROPIC_API_KEY is not configured.")
        logger.debug("LLM call: model=%s", model)
        try:
            message = await self._call_api(
                prompt=prompt,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise
        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = "".join(
            block.text for block in message.content or [] if block.type == "text"
        )
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    def get_token_summary(self) -> dict:
        """Return accumulated token usage with an estimated USD cost, and reset the log."""
        cost = 0.0
        for model, input_tokens, output_tokens in self._token_log:
            input_price, output_price = MODEL_PRICING.get(model, (0.0, 0.0))
            cost += (input_tokens * input_price + output_tokens * output_price) / 1_000_000
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "cost": cost,
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
