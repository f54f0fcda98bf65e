"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.debates.capability import ICapabilityProvider
    from modules.debates.interfaces import IDebateService
    from modules.questions.interfaces import IQuestionLog
    from modules.search.interfaces import ISearchService
    from providers.base import ProviderId


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._capabilities: "dict[ProviderId, ICapabilityProvider] | None" = None
        self._search_service: "ISearchService | None" = None
        self._question_log: "IQuestionLog | None" = None
        self._debate_service: "IDebateService | None" = None

    @property
    def capabilities(self) -> "dict[ProviderId, ICapabilityProvider]":
        """Get the capability provider lookup table."""
        if self._capabilities is None:
            from modules.debates.capability import get_capabilities
            self._capabilities = get_capabilities()
        return self._capabilities

    @property
    def search(self) -> "ISearchService":
        """Get the search service instance."""
        if self._search_service is None:
            from modules.search.service import get_search_service
            self._search_service = get_search_service()
        return self._search_service

    @property
    def question_log(self) -> "IQuestionLog":
        """Get the question log instance."""
        if self._question_log is None:
            from modules.questions.service import get_question_log
            self._question_log = get_question_log()
        return self._question_log

    @property
    def debates(self) -> "IDebateService":
        """Get the debate service instance."""
        if self._debate_service is None:
            from modules.debates.service import DebateService
            self._debate_service = DebateService(
                capabilities=self.capabilities,
                search=self.search,
                question_log=self.question_log,
            )
        return self._debate_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._capabilities = None
        self._search_service = None
        self._question_log = None
        self._debate_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_search_service() -> "ISearchService":
    """FastAPI dependency for the search service."""
    return get_container().search


def get_debate_service() -> "IDebateService":
    """FastAPI dependency for the debate service."""
    return get_container().debates
