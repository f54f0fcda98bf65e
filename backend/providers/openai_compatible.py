"""Unified provider for all OpenAI-compatible APIs.

This module consolidates 4 providers (openai, xai, groq, deepseek)
that all use LangChain's ChatOpenAI client with minor configuration differences.

The only providers NOT handled here are:
- Anthropic: Uses ChatAnthropic (different client)
- Google: Uses ChatGoogleGenerativeAI (different client)
"""

from collections.abc import Sequence
from dataclasses import dataclass

from langchain_core.runnables import Runnable
from langchain_core.tools import BaseTool
from langchain_openai import ChatOpenAI

from .base import LLMProvider, ModelConfig, ProviderId


@dataclass
class ProviderConfig:
    """Configuration for an OpenAI-compatible provider.

    Attributes:
        default_base_url: Default API endpoint URL (None uses OpenAI's default)
        api_key_env_var: Environment variable name for the API key (for error messages)
        sequential_tool_calls: Whether to ask the API for one tool call per step
    """

    default_base_url: str | None = None
    api_key_env_var: str = ""
    sequential_tool_calls: bool = False


# Provider configurations registry
PROVIDER_CONFIGS: dict[ProviderId, ProviderConfig] = {
    ProviderId.OPENAI: ProviderConfig(
        api_key_env_var="OPENAI_API_KEY",
        sequential_tool_calls=True,
    ),
    ProviderId.XAI: ProviderConfig(
        default_base_url="https://api.x.ai/v1",
        api_key_env_var="XAI_API_KEY",
    ),
    ProviderId.GROQ: ProviderConfig(
        default_base_url="https://api.groq.com/openai/v1",
        api_key_env_var="GROQ_API_KEY",
    ),
    ProviderId.DEEPSEEK: ProviderConfig(
        default_base_url="https://api.deepseek.com/v1",
        api_key_env_var="DEEPSEEK_API_KEY",
    ),
}


class OpenAICompatibleProvider(LLMProvider):
    """Unified provider for all OpenAI-compatible APIs.

    Handles: openai, xai, groq, deepseek

    All of them are cloud APIs that require a key; they differ only in
    base URL and a few request defaults.
    """

    def __init__(self, provider_type: ProviderId | str):
        """Initialize the provider.

        Args:
            provider_type: One of: openai, xai, groq, deepseek

        Raises:
            KeyError: If provider_type is not recognized
        """
        try:
            provider_id = ProviderId(provider_type)
        except ValueError:
            provider_id = None
        if provider_id not in PROVIDER_CONFIGS:
            raise KeyError(
                f"Unknown provider type: {provider_type}. "
                f"Valid types: {[p.value for p in PROVIDER_CONFIGS]}"
            )
        self.provider_type = provider_id
        self.provider_config = PROVIDER_CONFIGS[provider_id]

    def get_llm(self, config: ModelConfig) -> ChatOpenAI:
        """Return a ChatOpenAI client configured for this provider.

        Args:
            config: Model configuration with provider details

        Returns:
            A configured ChatOpenAI client

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                f"{self.provider_type.display_name} API key is required. "
                f"Set it via the {self.provider_config.api_key_env_var} environment variable."
            )

        kwargs: dict = {
            "model": config.model_id,
            "api_key": config.api_key,
            "temperature": config.temperature,
        }

        # Set base URL (from config or provider default)
        if base_url := (config.api_base or self.provider_config.default_base_url):
            kwargs["base_url"] = base_url

        return ChatOpenAI(**kwargs)

    def bind_tools(self, llm: ChatOpenAI, tools: Sequence[BaseTool]) -> Runnable:
        """Bind tools, disabling parallel tool calls where the API supports it."""
        if self.provider_config.sequential_tool_calls:
            return llm.bind_tools(tools, parallel_tool_calls=False)
        return llm.bind_tools(tools)
