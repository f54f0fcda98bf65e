"""
Search module.

Web search capability used by debate agents mid-turn.

Public API:
- ISearchService: Interface for search backends
- SearchResult: A single search hit
"""

from .interfaces import ISearchService
from .models import SearchResult

__all__ = [
    "ISearchService",
    "SearchResult",
]
