"""
Search service implementations.

Two web backends are supported:
- Google Custom Search JSON API
- Perplexity Search API

CompositeSearchService merges whichever of them are configured.
All backends swallow their own errors and return an empty list.
"""

import logging
from typing import Any, Optional

import httpx

from shared.config import Settings, get_settings

from .interfaces import ISearchService
from .models import SearchResult

logger = logging.getLogger(__name__)

# Google returns results three at a time per page for this deployment
GOOGLE_PAGE_SIZE = 3

PERPLEXITY_MAX_RESULTS = 10
PERPLEXITY_MAX_TOKENS_PER_PAGE = 2048
SNIPPET_LENGTH = 300


class GoogleSearchService(ISearchService):
    """
    Google Custom Search backend.

    Results carry the listing snippet only; result pages are not fetched,
    so content is always empty.
    """

    def __init__(
        self,
        api_key: str,
        engine_id: str,
        base_url: str = "https://www.googleapis.com/customsearch/v1",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._engine_id = engine_id
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def search(self, query: str, page_number: int = 0) -> list[SearchResult]:
        params = {
            "q": f"{query} filetype:html",
            "key": self._api_key,
            "cx": self._engine_id,
            "start": max(page_number, 0) * GOOGLE_PAGE_SIZE + 1,
        }
        logger.debug(f"Searching Google for: {query} (page {page_number})")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self._base_url, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Google search failed for '{query}': {e}")
            return []

        results = [self._map_item(item) for item in data.get("items", [])]
        logger.info(f"Google search '{query}' returned {len(results)} results")
        return results

    @staticmethod
    def _map_item(item: dict[str, Any]) -> SearchResult:
        """Prefer Open Graph / Twitter card metadata over the raw listing."""
        metatags = (item.get("pagemap") or {}).get("metatags") or [{}]
        meta = metatags[0] if metatags else {}
        return SearchResult(
            title=meta.get("og:title") or item.get("title", ""),
            link=item.get("link", ""),
            snippet=meta.get("twitter:description") or item.get("snippet", ""),
            content="",
        )


class PerplexitySearchService(ISearchService):
    """
    Perplexity Search API backend.

    The API has no paging, so page_number is ignored. Each result carries
    an extract of the page, which becomes the result content.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.perplexity.ai",
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def search(self, query: str, page_number: int = 0) -> list[SearchResult]:
        payload = {
            "query": query,
            "max_results": PERPLEXITY_MAX_RESULTS,
            "max_tokens_per_page": PERPLEXITY_MAX_TOKENS_PER_PAGE,
        }
        headers = {"Authorization": f"Bearer {self._api_key}"}
        logger.debug(f"Searching Perplexity for: {query}")

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    f"{self._base_url}/search", json=payload, headers=headers
                )
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Perplexity search failed for '{query}': {e}")
            return []

        results = []
        for item in data.get("results", []):
            text = item.get("snippet") or ""
            results.append(
                SearchResult(
                    title=item.get("title") or "",
                    link=item.get("url") or "",
                    snippet=text[:SNIPPET_LENGTH],
                    content=text,
                )
            )
        logger.info(f"Perplexity search '{query}' returned {len(results)} results")
        return results


class CompositeSearchService(ISearchService):
    """
    Runs several backends in order and concatenates their results.

    Results are de-duplicated by link, keeping the first occurrence.
    A backend that raises despite the contract contributes nothing.
    """

    def __init__(self, backends: Optional[list[ISearchService]] = None):
        self._backends = list(backends or [])

    @property
    def backends(self) -> list[ISearchService]:
        return list(self._backends)

    async def search(self, query: str, page_number: int = 0) -> list[SearchResult]:
        merged: list[SearchResult] = []
        seen: set[str] = set()
        for backend in self._backends:
            try:
                results = await backend.search(query, page_number)
            except Exception as e:
                logger.warning(f"Search backend {type(backend).__name__} failed: {e}")
                continue
            for result in results:
                if result.link in seen:
                    continue
                seen.add(result.link)
                merged.append(result)
        return merged


def build_search_service(settings: Settings) -> CompositeSearchService:
    """Build a composite from every backend that has credentials."""
    backends: list[ISearchService] = []
    if settings.google_search_api_key and settings.google_search_engine_id:
        backends.append(
            GoogleSearchService(
                api_key=settings.google_search_api_key,
                engine_id=settings.google_search_engine_id,
                base_url=settings.google_search_base_url,
                timeout=settings.search_timeout,
            )
        )
    if settings.perplexity_api_key:
        backends.append(
            PerplexitySearchService(
                api_key=settings.perplexity_api_key,
                base_url=settings.perplexity_base_url,
                timeout=settings.search_timeout,
            )
        )
    if not backends:
        logger.warning("No search backend configured; agents will search with no results")
    return CompositeSearchService(backends)


# Module-level instance getter
_service_instance: Optional[CompositeSearchService] = None


def get_search_service() -> CompositeSearchService:
    """Get the search service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = build_search_service(get_settings())
    return _service_instance


def reset_search_service() -> None:
    """Reset the search service singleton (for testing)."""
    global _service_instance
    _service_instance = None
