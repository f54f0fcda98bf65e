"""
Centralized configuration for the Colloquy backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., DEBATE_*, GOOGLE_SEARCH_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Colloquy API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (question log)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    questions_table: str = "questions"

    # LLM Provider API Keys
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    xai_api_key: str = ""
    googleai_api_key: str = ""
    groq_api_key: str = ""
    deepseek_api_key: str = ""

    # Model overrides, one per provider
    openai_model: str = "gpt-5-mini"
    anthropic_model: str = "claude-3-haiku-20240307"
    xai_model: str = "grok-3-mini-beta"
    google_model: str = "gemini-2.5-flash-lite"
    groq_model: str = "llama-3.1-8b-instant"
    deepseek_model: str = "deepseek-chat"

    # Search backends
    google_search_api_key: str = ""
    google_search_engine_id: str = ""
    google_search_base_url: str = "https://www.googleapis.com/customsearch/v1"
    perplexity_api_key: str = ""
    perplexity_base_url: str = "https://api.perplexity.ai"
    search_timeout: float = 15.0

    # Debate orchestration
    debate_participants: list[str] = ["openai", "google"]
    debate_arbiter: str = "openai"
    debate_max_rounds: int = 10
    debate_max_tool_steps: int = 3
    debate_provider_timeout: float = 120.0
    debate_emit_turn_failures: bool = False
    debate_cancel_on_disconnect: bool = False


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
