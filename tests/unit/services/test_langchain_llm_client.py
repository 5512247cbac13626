"""Unit tests for LangChain LLM client."""

import pytest
from unittest.mock import Mock, patch
import os

from incident_service.services.langchain_llm_client import (
    LLMConfig,
    LangChainLLMClient,
)


class TestLLMConfig:
    """Tests for LLMConfig class."""

    def test_from_env_success(self):
        """Test creating config from environment variables."""
        with patch.dict(
            os.environ,
            {
                "LLM_BASE_URL": "https://api.example.com/v1",
                "LLM_API_KEY": "test-key-123",
                "LLM_MODEL_NAME": "gpt-4o-mini",
                "LLM_TEMPERATURE": "0.0",
                "LLM_MAX_TOKENS": "100",
                "LLM_TIMEOUT": "5",
            },
            clear=True,
        ):
            config = LLMConfig.from_env()

            assert config.base_url == "https://api.example.com/v1"
            assert config.api_key == "test-key-123"
            assert config.model_name == "gpt-4o-mini"
            assert config.temperature == 0.0
            assert config.max_tokens == 100
            assert config.timeout == 5.0

    def test_from_env_defaults(self):
        """Test config defaults when optional env vars not set."""
        with patch.dict(os.environ, {"LLM_API_KEY": "test-key-123"}, clear=True):
            config = LLMConfig.from_env()

            assert config.base_url == "https://api.openai.com/v1"
            assert config.model_name == "gpt-3.5-turbo"
            assert config.temperature == 0.1
            assert config.max_tokens == 256
            assert config.timeout == 30.0

    def test_from_env_openai_key_fallback(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-openai"}, clear=True):
            config = LLMConfig.from_env()

            assert config.api_key == "sk-openai"

    def test_from_env_missing_api_key(self):
        """Test error when no API key is set."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="LLM_API_KEY"):
                LLMConfig.from_env()


class TestLangChainLLMClient:
    """Tests for LangChainLLMClient class."""

    @pytest.fixture
    def config(self):
        """Create test config."""
        return LLMConfig(
            base_url="https://api.example.com/v1",
            api_key="test-key-123",
            model_name="gpt-3.5-turbo",
        )

    @pytest.fixture
    def client(self, config):
        """Create test client."""
        with patch("incident_service.services.langchain_llm_client.ChatOpenAI"):
            return LangChainLLMClient(config)

    def test_initialization(self, config):
        """Test client initialization."""
        with patch("incident_service.services.langchain_llm_client.ChatOpenAI") as mock_chat:
            client = LangChainLLMClient(config)

            mock_chat.assert_called_once_with(
                base_url=config.base_url,
                api_key=config.api_key,
                model=config.model_name,
                temperature=0.1,
                max_tokens=256,
                timeout=30.0,
                max_retries=0,
            )
            assert client.config == config

    def test_complete_returns_stripped_content(self, client):
        client.llm.invoke = Mock(return_value=Mock(content='  {"severity": "low"}\n'))

        result = client.complete("classify this")

        assert result == '{"severity": "low"}'
        client.llm.invoke.assert_called_once_with("classify this")

    def test_complete_non_text_content(self, client):
        client.llm.invoke = Mock(return_value=Mock(content=[{"type": "image"}]))

        assert client.complete("classify this") == ""

    def test_complete_propagates_errors(self, client):
        client.llm.invoke = Mock(side_effect=TimeoutError("timed out"))

        with pytest.raises(TimeoutError):
            client.complete("classify this")
