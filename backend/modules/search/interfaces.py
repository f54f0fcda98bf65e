"""
Search module interface.

The debate orchestrator reaches the web only through ISearchService.
"""

from typing import Protocol, runtime_checkable

from .models import SearchResult


@runtime_checkable
class ISearchService(Protocol):
    """
    Interface for search backends.

    Implementations never raise to the caller: on any failure they log
    and return an empty list so that a debate turn can proceed without
    web content.
    """

    async def search(
        self,
        query: str,
        page_number: int = 0,
    ) -> list[SearchResult]:
        """
        Search for a query.

        Args:
            query: Free-text search query
            page_number: Zero-based page of results

        Returns:
            Ranked results, empty on failure
        """
        ...
