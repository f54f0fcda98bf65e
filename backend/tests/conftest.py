"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from api.dependencies import reset_container
from modules.debates.service import reset_debate_service
from modules.questions.service import reset_question_log
from modules.search.service import reset_search_service
from providers.base import ProviderId
from shared.config import Settings, get_settings
from shared.database import reset_client_cache

from tests.stubs import RecordingQuestionLog, ScriptedCapability, StaticSearch


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and service singletons around each test."""
    get_settings.cache_clear()
    reset_container()
    reset_debate_service()
    reset_search_service()
    reset_question_log()
    reset_client_cache()
    yield
    get_settings.cache_clear()
    reset_container()
    reset_debate_service()
    reset_search_service()
    reset_question_log()
    reset_client_cache()


@pytest.fixture
def settings() -> Settings:
    """Settings with no API keys and default debate behavior."""
    return Settings(
        _env_file=None,
        openai_api_key="",
        googleai_api_key="",
        supabase_url="",
        supabase_service_role_key="",
    )


@pytest.fixture
def capabilities() -> dict[ProviderId, ScriptedCapability]:
    """One scripted capability per provider identity."""
    return {provider: ScriptedCapability(default=f"{provider.value} says hi") for provider in ProviderId}


@pytest.fixture
def search() -> StaticSearch:
    return StaticSearch()


@pytest.fixture
def question_log() -> RecordingQuestionLog:
    return RecordingQuestionLog()
