"""Google Gemini LLM provider implementation.

Handles Google's Gemini models via the langchain-google-genai package.
Requires a valid API key for authentication.
"""

from langchain_google_genai import ChatGoogleGenerativeAI

from .base import LLMProvider, ModelConfig


class GeminiProvider(LLMProvider):
    """Provider for Google Gemini models.

    Gemini models use the ChatGoogleGenerativeAI client from langchain-google-genai.
    """

    def get_llm(self, config: ModelConfig) -> ChatGoogleGenerativeAI:
        """Return a ChatGoogleGenerativeAI client configured for Gemini.

        Args:
            config: Model configuration with Google AI API details

        Returns:
            A configured ChatGoogleGenerativeAI client

        Raises:
            ValueError: If api_key is not provided
        """
        if not config.api_key:
            raise ValueError(
                "Google AI API key is required. "
                "Set it via the GOOGLEAI_API_KEY environment variable."
            )

        return ChatGoogleGenerativeAI(
            model=config.model_id,
            google_api_key=config.api_key,
            temperature=config.temperature,
        )
