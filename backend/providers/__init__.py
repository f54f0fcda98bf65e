"""LLM provider implementations."""

from .base import LLMProvider, ModelConfig, ProviderId
from .factory import get_model_config, get_providers, parse_provider

__all__ = [
    "LLMProvider",
    "ModelConfig",
    "ProviderId",
    "get_model_config",
    "get_providers",
    "parse_provider",
]
