"""Base classes and models for LLM providers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.runnables import Runnable
from langchain_core.tools import BaseTool
from pydantic import BaseModel


class ProviderId(str, Enum):
    """Identity of a backend agent.

    Used both as a routing key (lookup tables are keyed by it) and as
    the label shown to other agents and to the client.
    """

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    XAI = "xai"
    GOOGLE = "google"
    GROQ = "groq"
    DEEPSEEK = "deepseek"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ProviderId.OPENAI: "OpenAI",
    ProviderId.ANTHROPIC: "Anthropic",
    ProviderId.XAI: "xAI",
    ProviderId.GOOGLE: "Google",
    ProviderId.GROQ: "Groq",
    ProviderId.DEEPSEEK: "DeepSeek",
}


class ModelConfig(BaseModel):
    """Configuration for the model backing one provider.

    Attributes:
        model_name: Friendly alias (e.g., "openai-default")
        provider_type: Provider identity value (e.g., "openai")
        model_id: Model identifier (e.g., "gpt-5-mini")
        api_base: Base URL override (empty uses the provider default)
        api_key: API key for the provider
        temperature: Sampling temperature
    """

    model_config = {"frozen": True}

    model_name: str
    provider_type: str
    model_id: str
    api_base: str = ""
    api_key: str = ""
    temperature: float = 0.0


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations are thin wrappers that build a LangChain chat model
    with provider-specific defaults.
    """

    @abstractmethod
    def get_llm(self, config: ModelConfig) -> BaseChatModel:
        """Return a configured LLM client for the given model.

        Args:
            config: Model configuration with provider details

        Returns:
            A configured LangChain chat model

        Raises:
            ValueError: If a required API key is missing
        """
        pass

    def bind_tools(self, llm: BaseChatModel, tools: Sequence[BaseTool]) -> Runnable:
        """Return ``llm`` with ``tools`` bound for function calling."""
        return llm.bind_tools(tools)
