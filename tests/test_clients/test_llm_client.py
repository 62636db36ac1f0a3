"""Tests for LLMClient (Claude API wrapper)."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_analyzer.clients.llm_client import MODEL_PRICING, LLMClient, LLMResponse, MissingAPIKeyError


def _make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(type="text", text=text)]
    return message


class TestLLMClientInit:
    def test_init_does_not_create_sdk_client(self):
        """The SDK client is built lazily, so construction never touches it."""
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            LLMClient(api_key="test-key")
            mock_cls.assert_not_called()

    def test_client_created_with_key_and_no_retries(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient(api_key="test-key")
            llm.client
            mock_cls.assert_called_once_with(api_key="test-key", max_retries=0)

    def test_client_created_with_timeout(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient(api_key="test-key", timeout=30.0)
            llm.client
            mock_cls.assert_called_once_with(api_key="test-key", max_retries=0, timeout=30.0)

    def test_client_is_reused(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient(api_key="test-key")
            assert llm.client is llm.client
            assert mock_cls.call_count == 1


class TestLLMClientMissingKey:
    async def test_generate_without_key_raises_before_network(self):
        """A missing key fails fast and the SDK client is never constructed."""
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient(api_key=None)
            with pytest.raises(MissingAPIKeyError, match="ANTHROPIC_API_KEY"):
                await llm.generate("prompt")
            mock_cls.assert_not_called()

    async def test_empty_key_counts_as_missing(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            llm = LLMClient(api_key="")
            with pytest.raises(MissingAPIKeyError):
                await llm.generate("prompt")
            mock_cls.assert_not_called()


class TestLLMClientGenerate:
    async def test_generate_returns_llm_response(self):
        """generate() wraps API response fields into an LLMResponse dataclass."""
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("hello world", input_tokens=100, output_tokens=50)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            result = await llm.generate("say hello")

        assert isinstance(result, LLMResponse)
        assert result.text == "hello world"
        assert result.input_tokens == 100
        assert result.output_tokens == 50

    async def test_generate_passes_system_and_sampling_params(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("ok"))
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            await llm.generate(
                "user text", system="be terse", model="claude-x", temperature=0.7, max_tokens=123
            )

        mock_client.messages.create.assert_awaited_once_with(
            model="claude-x",
            max_tokens=123,
            temperature=0.7,
            messages=[{"role": "user", "content": "user text"}],
            system="be terse",
        )

    async def test_generate_omits_empty_system(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=_make_api_message("ok"))
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            await llm.generate("user text")

        assert "system" not in mock_client.messages.create.call_args.kwargs

    async def test_generate_with_no_content_returns_empty_text(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            message = _make_api_message("")
            message.content = []
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=message)
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            result = await llm.generate("prompt")

        assert result.text == ""

    async def test_generate_skips_non_text_blocks(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            message = _make_api_message("")
            message.content = [
                MagicMock(type="thinking", spec=["type", "thinking"]),
                MagicMock(type="text", text="# Report\n"),
                MagicMock(type="text", text="Score: 80 / 100"),
            ]
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=message)
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            result = await llm.generate("prompt")

        assert result.text == "# Report\nScore: 80 / 100"

    async def test_generate_propagates_api_errors_without_retry(self):
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(side_effect=ConnectionError("network down"))
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            with pytest.raises(ConnectionError, match="network down"):
                await llm.generate("prompt")

        assert mock_client.messages.create.await_count == 1
        assert llm._token_log == []

    async def test_token_log_stores_model_and_counts(self):
        """_token_log entries are (model, input_tokens, output_tokens) tuples."""
        with patch("resume_analyzer.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(
                return_value=_make_api_message("resp", input_tokens=20, output_tokens=8)
            )
            mock_cls.return_value = mock_client

            llm = LLMClient(api_key="test-key")
            await llm.generate("prompt", model="claude-sonnet-4-5-20250929")

        model, inp, out = llm._token_log[0]
        assert model == "claude-sonnet-4-5-20250929"
        assert inp == 20
        assert out == 8


class TestLLMClientTokenSummary:
    def test_get_token_summary_returns_correct_totals(self):
        llm = LLMClient(api_key="test-key")
        llm._token_log = [
            ("claude-sonnet-4-5-20250929", 100, 50),
            ("claude-sonnet-4-5-20250929", 200, 80),
        ]

        summary = llm.get_token_summary()

        assert summary["input"] == 300
        assert summary["output"] == 130
        assert len(summary["calls"]) == 2

    def test_get_token_summary_clears_log_after_return(self):
        llm = LLMClient(api_key="test-key")
        llm._token_log = [("claude-sonnet-4-5-20250929", 50, 25)]

        llm.get_token_summary()
        second_summary = llm.get_token_summary()

        assert second_summary["input"] == 0
        assert second_summary["output"] == 0
        assert second_summary["calls"] == []

    def test_get_token_summary_estimates_cost(self):
        llm = LLMClient(api_key="test-key")
        llm._token_log = [
            ("claude-sonnet-4-5-20250929", 1_000_000, 1_000_000),
            ("claude-haiku-4-5-20251001", 2000, 1000),
        ]

        summary = llm.get_token_summary()

        expected = 18.00 + (2000 / 1e6) * 1.00 + (1000 / 1e6) * 5.00
        assert summary["cost"] == pytest.approx(expected)

    def test_unpriced_model_costs_nothing(self):
        llm = LLMClient(api_key="test-key")
        llm._token_log = [("some-other-model", 1_000_000, 1_000_000)]

        assert llm.get_token_summary()["cost"] == 0.0

    def test_default_model_is_priced(self):
        from resume_analyzer.config import LLMConfig

        assert LLMConfig().model in MODEL_PRICING
