"""Tests for application configuration."""
import pytest

from incident_service.config import (
    DEFAULT_DATABASE_URL,
    get_database_url,
    get_llm_api_key,
    get_llm_config,
)


def test_get_database_url_from_env(monkeypatch):
    """Test that DATABASE_URL environment variable takes priority."""
    monkeypatch.setenv("DATABASE_URL", "sqlite:////tmp/custom.db")

    assert get_database_url() == "sqlite:////tmp/custom.db"


def test_get_database_url_default(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    assert get_database_url() == DEFAULT_DATABASE_URL


def test_llm_api_key_prefers_llm_variable(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "llm-key")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")

    assert get_llm_api_key() == "llm-key"


def test_llm_api_key_absent(monkeypatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert get_llm_api_key() is None


def test_get_llm_config_low_temperature_default(monkeypatch):
    monkeypatch.delenv("LLM_TEMPERATURE", raising=False)

    assert get_llm_config()["temperature"] == 0.1


def test_get_llm_config_numeric_overrides(monkeypatch):
    monkeypatch.setenv("LLM_MAX_TOKENS", "512")
    monkeypatch.setenv("LLM_TIMEOUT", "12.5")

    config = get_llm_config()

    assert config["max_tokens"] == 512
    assert config["timeout"] == 12.5


def test_get_llm_config_malformed_number(monkeypatch):
    monkeypatch.setenv("LLM_MAX_TOKENS", "lots")

    with pytest.raises(ValueError, match="LLM_MAX_TOKENS must be a number, got 'lots'"):
        get_llm_config()
