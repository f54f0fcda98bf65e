"""Factory functions for creating LLM providers and their model configs."""

from shared.config import Settings, get_settings

from .anthropic import AnthropicProvider
from .base import LLMProvider, ModelConfig, ProviderId
from .gemini import GeminiProvider
from .openai_compatible import OpenAICompatibleProvider


def get_providers() -> dict[ProviderId, LLMProvider]:
    """Get one provider instance per provider identity.

    Returns:
        Dictionary mapping every ProviderId to its provider implementation.
    """
    return {
        ProviderId.OPENAI: OpenAICompatibleProvider(ProviderId.OPENAI),
        ProviderId.ANTHROPIC: AnthropicProvider(),
        ProviderId.XAI: OpenAICompatibleProvider(ProviderId.XAI),
        ProviderId.GOOGLE: GeminiProvider(),
        ProviderId.GROQ: OpenAICompatibleProvider(ProviderId.GROQ),
        ProviderId.DEEPSEEK: OpenAICompatibleProvider(ProviderId.DEEPSEEK),
    }


def get_model_config(provider: ProviderId, settings: Settings | None = None) -> ModelConfig:
    """Build the ModelConfig for a provider from settings.

    OpenAI's reasoning models only accept the default temperature of 1;
    every other provider runs deterministic (temperature 0).
    """
    settings = settings or get_settings()
    api_keys = {
        ProviderId.OPENAI: settings.openai_api_key,
        ProviderId.ANTHROPIC: settings.anthropic_api_key,
        ProviderId.XAI: settings.xai_api_key,
        ProviderId.GOOGLE: settings.googleai_api_key,
        ProviderId.GROQ: settings.groq_api_key,
        ProviderId.DEEPSEEK: settings.deepseek_api_key,
    }
    model_ids = {
        ProviderId.OPENAI: settings.openai_model,
        ProviderId.ANTHROPIC: settings.anthropic_model,
        ProviderId.XAI: settings.xai_model,
        ProviderId.GOOGLE: settings.google_model,
        ProviderId.GROQ: settings.groq_model,
        ProviderId.DEEPSEEK: settings.deepseek_model,
    }
    return ModelConfig(
        model_name=f"{provider.value}-default",
        provider_type=provider.value,
        model_id=model_ids[provider],
        api_key=api_keys[provider],
        temperature=1.0 if provider == ProviderId.OPENAI else 0.0,
    )


def parse_provider(value: str) -> ProviderId:
    """Parse a provider name (case-insensitive) into a ProviderId.

    Raises:
        ValueError: If the name is not a known provider
    """
    try:
        return ProviderId(value.strip().lower())
    except ValueError:
        raise ValueError(
            f"Invalid provider '{value}'. "
            f"Expected one of: {', '.join(p.value for p in ProviderId)}"
        ) from None
