"""Anthropic Claude LLM provider implementation.

Handles Anthropic's Claude models via the langchain-anthropic package.
"""

from langchain_anthropic import ChatAnthropic

from .base import LLMProvider, ModelConfig


class AnthropicProvider(LLMProvider):
    """Provider for Anthropic Claude models.

    Anthropic models use a different API than OpenAI-compatible providers,
    so we use ChatAnthropic from langchain-anthropic instead of ChatOpenAI.
    Extended thinking is left off: debate turns need plain answers.
    """

    def get_llm(self, config: ModelConfig) -> ChatAnthropic:
        """Return a ChatAnthropic client configured for Claude.

        Args:
            config: Model configuration with Anthropic API details

        Returns:
            A configured ChatAnthropic client

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                "Anthropic API key is required. "
                "Set it via the ANTHROPIC_API_KEY environment variable."
            )

        kwargs: dict = {
            "model": config.model_id,
            "api_key": config.api_key,
            "temperature": config.temperature,
        }
        if config.api_base:
            kwargs["base_url"] = config.api_base

        return ChatAnthropic(**kwargs)
