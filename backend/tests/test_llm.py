"""
Unit tests for the LLM module.
Tests LLMMessage, LLMResponse, providers, and factory.
"""

import httpx
import pytest
from unittest.mock import AsyncMock, patch, MagicMock

from focusflow.llm.base import LLMMessage, LLMResponse
from focusflow.llm.openai_provider import OpenAIProvider, GeminiProvider
from focusflow.llm.volcengine_provider import VolcEngineProvider
from focusflow.llm.factory import create_llm_provider


def mock_async_client(mock_client, response):
    mock_instance = AsyncMock()
    mock_instance.post.return_value = response
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_client.return_value = mock_instance
    return mock_instance


class TestLLMMessage:
    """Tests for LLMMessage dataclass."""

    def test_text_message(self):
        msg = LLMMessage.text("user", "Hello")
        assert msg.role == "user"
        assert msg.content == "Hello"


class TestLLMResponse:
    """Tests for LLMResponse dataclass."""

    def test_basic_response(self):
        resp = LLMResponse(content="Hello!", model="gpt-4o-mini")
        assert resp.content == "Hello!"
        assert resp.usage == {}
        assert resp.raw is None


class TestOpenAIProvider:
    """Tests for OpenAI-compatible provider."""

    def test_init_defaults(self):
        provider = OpenAIProvider(api_key="test-key")
        assert provider.api_key == "test-key"
        assert provider.model == "gpt-4o-mini"
        assert provider.base_url == "https://api.openai.com/v1"

    def test_trailing_slash_trimmed(self):
        provider = OpenAIProvider(api_key="key", base_url="https://custom.api.com/v1/")
        assert provider.base_url == "https://custom.api.com/v1"

    def test_format_messages(self):
        provider = OpenAIProvider(api_key="test")
        formatted = provider._format_messages([
            LLMMessage.text("system", "sys prompt"),
            LLMMessage.text("user", "hello")
        ])
        assert formatted == [
            {"role": "system", "content": "sys prompt"},
            {"role": "user", "content": "hello"},
        ]

    def test_headers(self):
        provider = OpenAIProvider(api_key="sk-test123")
        headers = provider._get_headers()
        assert headers["Authorization"] == "Bearer sk-test123"
        assert headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_chat_completion_success(self):
        provider = OpenAIProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "choices": [{"message": {"content": "Test response"}}],
            "model": "gpt-4o-mini",
            "usage": {"prompt_tokens": 10, "completion_tokens": 5}
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_instance = mock_async_client(mock_client, mock_response)

            result = await provider.chat_completion(
                [LLMMessage.text("user", "Hello")], temperature=0.2
            )

            assert result.content == "Test response"
            assert result.usage["prompt_tokens"] == 10
            url = mock_instance.post.call_args.args[0]
            payload = mock_instance.post.call_args.kwargs["json"]
            assert url == "https://api.openai.com/v1/chat/completions"
            assert payload["temperature"] == 0.2
            assert payload["messages"] == [{"role": "user", "content": "Hello"}]

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty(self):
        provider = OpenAIProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {"choices": [{"message": {"content": None}}]}
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_async_client(mock_client, mock_response)
            result = await provider.chat_completion([LLMMessage.text("user", "Hello")])

        assert result.content == ""

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        provider = OpenAIProvider(api_key="test-key")
        request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        mock_response = MagicMock()
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "429 Too Many Requests", request=request, response=httpx.Response(429, request=request)
        )

        with patch("httpx.AsyncClient") as mock_client:
            mock_async_client(mock_client, mock_response)
            with pytest.raises(httpx.HTTPStatusError):
                await provider.chat_completion([LLMMessage.text("user", "Hello")])


class TestGeminiProvider:
    """Tests for Gemini provider."""

    def test_init_defaults(self):
        provider = GeminiProvider(api_key="test-key")
        assert provider.name == "gemini"
        assert provider.model.startswith("gemini")
        assert "generativelanguage.googleapis.com" in provider.base_url

    def test_timeout_passthrough(self):
        provider = GeminiProvider(api_key="k", timeout=5.0)
        assert provider.timeout == 5.0


class TestVolcEngineProvider:
    """Tests for Volcano Engine provider."""

    def test_init_defaults(self):
        provider = VolcEngineProvider(api_key="test-key")
        assert provider.model == "doubao-1-5-pro-256k-250115"
        assert "volces.com" in provider.base_url
        assert provider.timeout == 120.0

    @pytest.mark.asyncio
    async def test_chat_completion_success(self):
        provider = VolcEngineProvider(api_key="test-key")
        mock_response = MagicMock()
        mock_response.json.return_value = {
            "choices": [{"message": {"content": "火山引擎回复"}}],
            "model": "doubao-1-5-pro-256k-250115",
            "usage": {}
        }
        mock_response.raise_for_status = MagicMock()

        with patch("httpx.AsyncClient") as mock_client:
            mock_async_client(mock_client, mock_response)
            result = await provider.chat_completion([LLMMessage.text("user", "你好")])

        assert result.content == "火山引擎回复"


class TestLLMFactory:
    """Tests for LLM provider factory."""

    def test_create_openai_provider(self):
        provider = create_llm_provider(provider="openai", api_key="test-key", model="gpt-4o")
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_create_gemini_provider(self):
        provider = create_llm_provider(provider="gemini", api_key="test-key")
        assert isinstance(provider, GeminiProvider)

    def test_create_volcengine_provider(self):
        provider = create_llm_provider(provider="VolcEngine", api_key="test-key")
        assert isinstance(provider, VolcEngineProvider)

    @pytest.mark.parametrize("api_key", ["", None])
    def test_no_api_key_returns_none(self, api_key):
        assert create_llm_provider(provider="openai", api_key=api_key) is None

    def test_unsupported_provider_raises(self):
        with pytest.raises(ValueError, match="Unsupported"):
            create_llm_provider(provider="unsupported", api_key="key")

    def test_custom_base_url_and_kwargs(self):
        provider = create_llm_provider(
            provider="openai",
            api_key="key",
            base_url="https://custom.api.com/v1",
            timeout=10.0,
        )
        assert provider.base_url == "https://custom.api.com/v1"
        assert provider.timeout == 10.0
