"""Application configuration management."""
import os
from typing import Optional

SERVICE_MESSAGE = "Incident Management API is running"
SERVICE_VERSION = "1.0.0"

DEFAULT_DATABASE_URL = "sqlite:///./incidents.db"


def get_database_url() -> str:
    """
    Get the SQLAlchemy database URL.

    Priority order:
    1. DATABASE_URL environment variable
    2. Default: incidents.db in the working directory

    Returns:
        str: The database URL
    """
    return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL


def get_llm_api_key() -> Optional[str]:
    """Return the classifier API key, accepting OPENAI_API_KEY as a fallback."""
    return os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY") or None


def get_env_number(name: str, default: str, cast=float):
    """Read a numeric environment variable, naming the variable when it is malformed."""
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def get_llm_config() -> dict:
    """
    Get LLM configuration from environment variables.

    Returns:
        dict: LLM configuration with base_url, api_key, model_name, etc.

    Raises:
        ValueError: If a numeric setting is malformed
    """
    return {
        "base_url": os.getenv("LLM_BASE_URL", "https://api.openai.com/v1"),
        "api_key": get_llm_api_key(),
        "model_name": os.getenv("LLM_MODEL_NAME", "gpt-3.5-turbo"),
        "temperature": get_env_number("LLM_TEMPERATURE", "0.1"),
        "max_tokens": get_env_number("LLM_MAX_TOKENS", "256", cast=int),
        "timeout": get_env_number("LLM_TIMEOUT", "30"),
    }
