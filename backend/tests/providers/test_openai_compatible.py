"""Tests for the unified OpenAI-compatible provider.

This module tests the OpenAICompatibleProvider which handles
openai, xai, groq and deepseek (all require API keys).
"""

import pytest
from unittest.mock import patch, MagicMock

from providers.openai_compatible import (
    OpenAICompatibleProvider,
    PROVIDER_CONFIGS,
    ProviderConfig,
)
from providers.base import ModelConfig, ProviderId


def make_config(provider_type: str, api_key: str = "test-key", api_base: str = "") -> ModelConfig:
    return ModelConfig(
        model_name="test-model",
        provider_type=provider_type,
        model_id="test-model-id",
        api_base=api_base,
        api_key=api_key,
    )


# =============================================================================
# Unit Tests - Parameterized across all provider types
# =============================================================================


class TestOpenAICompatibleProviderInstantiation:
    """Test provider instantiation for all types."""

    @pytest.mark.parametrize("provider_type", list(PROVIDER_CONFIGS.keys()))
    def test_provider_instantiation(self, provider_type):
        """All provider types should instantiate without errors."""
        provider = OpenAICompatibleProvider(provider_type)
        assert provider.provider_type == provider_type
        assert provider.provider_config == PROVIDER_CONFIGS[provider_type]

    def test_accepts_string_identity(self):
        """Provider identity may be passed as its string value."""
        provider = OpenAICompatibleProvider("groq")
        assert provider.provider_type is ProviderId.GROQ

    def test_unknown_provider_raises_error(self):
        """Should raise KeyError for unknown provider type."""
        with pytest.raises(KeyError, match="Unknown provider type"):
            OpenAICompatibleProvider("unknown_provider")

    @pytest.mark.parametrize("provider_type", [ProviderId.ANTHROPIC, ProviderId.GOOGLE])
    def test_non_openai_compatible_identity_rejected(self, provider_type):
        """Anthropic and Google have their own clients."""
        with pytest.raises(KeyError):
            OpenAICompatibleProvider(provider_type)


class TestAPIKeyValidation:
    """Test API key validation."""

    @pytest.mark.parametrize(
        "provider_type,env_var",
        [
            ("openai", "OPENAI_API_KEY"),
            ("xai", "XAI_API_KEY"),
            ("groq", "GROQ_API_KEY"),
            ("deepseek", "DEEPSEEK_API_KEY"),
        ],
    )
    def test_api_key_required(self, provider_type, env_var):
        """Every provider should raise ValueError naming its env var if no key is set."""
        provider = OpenAICompatibleProvider(provider_type)

        with pytest.raises(ValueError, match="API key is required") as exc_info:
            provider.get_llm(make_config(provider_type, api_key=""))

        assert env_var in str(exc_info.value)


class TestGetLLM:
    """Test ChatOpenAI construction."""

    @pytest.mark.parametrize(
        "provider_type,base_url",
        [
            ("xai", "https://api.x.ai/v1"),
            ("groq", "https://api.groq.com/openai/v1"),
            ("deepseek", "https://api.deepseek.com/v1"),
        ],
    )
    @patch("providers.openai_compatible.ChatOpenAI")
    def test_uses_default_base_url(self, mock_chat, provider_type, base_url):
        """Providers other than OpenAI should point at their own endpoint."""
        OpenAICompatibleProvider(provider_type).get_llm(make_config(provider_type))

        assert mock_chat.call_args.kwargs["base_url"] == base_url

    @patch("providers.openai_compatible.ChatOpenAI")
    def test_openai_uses_client_default_url(self, mock_chat):
        """OpenAI should not override the client's base URL."""
        OpenAICompatibleProvider("openai").get_llm(make_config("openai"))

        assert "base_url" not in mock_chat.call_args.kwargs

    @patch("providers.openai_compatible.ChatOpenAI")
    def test_config_base_url_overrides_default(self, mock_chat):
        """An explicit api_base should win over the provider default."""
        OpenAICompatibleProvider("groq").get_llm(
            make_config("groq", api_base="http://localhost:9999/v1")
        )

        assert mock_chat.call_args.kwargs["base_url"] == "http://localhost:9999/v1"

    @patch("providers.openai_compatible.ChatOpenAI")
    def test_passes_model_key_and_temperature(self, mock_chat):
        config = ModelConfig(
            model_name="openai-default",
            provider_type="openai",
            model_id="gpt-5-mini",
            api_key="sk-test",
            temperature=1.0,
        )

        OpenAICompatibleProvider("openai").get_llm(config)

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["model"] == "gpt-5-mini"
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["temperature"] == 1.0


class TestBindTools:
    """Test tool binding options."""

    def test_openai_disables_parallel_tool_calls(self):
        llm = MagicMock()
        tools = [MagicMock()]

        OpenAICompatibleProvider("openai").bind_tools(llm, tools)

        llm.bind_tools.assert_called_once_with(tools, parallel_tool_calls=False)

    @pytest.mark.parametrize("provider_type", ["xai", "groq", "deepseek"])
    def test_others_use_plain_binding(self, provider_type):
        llm = MagicMock()
        tools = [MagicMock()]

        OpenAICompatibleProvider(provider_type).bind_tools(llm, tools)

        llm.bind_tools.assert_called_once_with(tools)


class TestProviderConfig:
    """Test ProviderConfig defaults."""

    def test_defaults(self):
        config = ProviderConfig()
        assert config.default_base_url is None
        assert config.api_key_env_var == ""
        assert config.sequential_tool_calls is False
