"""
LangChain-based LLM client for the incident service.

This module wraps LangChain's ChatOpenAI so that any OpenAI-compatible
endpoint can back the incident classifier.
"""

import logging
from pydantic import BaseModel, Field
from langchain_openai import ChatOpenAI

from ..config import get_llm_config

logger = logging.getLogger(__name__)


# Configuration
class LLMConfig(BaseModel):
    """Configuration for LLM client."""

    base_url: str = Field(description="Base URL for the OpenAI-compatible API endpoint")
    api_key: str = Field(description="API key for authentication")
    model_name: str = Field(
        description="Name of the model to use (e.g., 'gpt-3.5-turbo', 'gpt-4o-mini')"
    )
    temperature: float = Field(
        default=0.1, description="Temperature for response generation (0.0-1.0)"
    )
    max_tokens: int = Field(
        default=256, description="Maximum number of tokens in the response"
    )
    timeout: float = Field(
        default=30.0, description="Request timeout in seconds"
    )

    @classmethod
    def from_env(cls) -> "LLMConfig":
        """Create configuration from environment variables."""
        values = get_llm_config()

        if not values["api_key"]:
            raise ValueError("LLM_API_KEY environment variable not set")

        return cls(**values)


# LangChain LLM Client
class LangChainLLMClient:
    """
    LangChain-based LLM client for single-shot text completions.

    Each call is one round trip with no retries; callers decide how to
    handle failures.
    """

    def __init__(self, config: LLMConfig):
        """
        Initialize the LangChain LLM client.

        Args:
            config: LLM configuration including API endpoint and credentials
        """
        self.config = config
        self.llm = ChatOpenAI(
            base_url=config.base_url,
            api_key=config.api_key,
            model=config.model_name,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            max_retries=0,
        )
        logger.info(
            f"Initialized LangChain LLM client with model {config.model_name} "
            f"at {config.base_url}"
        )

    def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the text of the reply.

        Args:
            prompt: The user prompt

        Returns:
            The reply content, stripped; empty when the model returned no text

        Raises:
            Exception: Whatever the underlying transport raises
        """
        response = self.llm.invoke(prompt)
        content = response.content
        if not isinstance(content, str):
            return ""
        return content.strip()
