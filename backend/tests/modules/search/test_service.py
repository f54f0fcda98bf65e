"""Tests for search service implementations."""

import json

import httpx
import pytest

from modules.search.interfaces import ISearchService
from modules.search.models import SearchResult
from modules.search.service import (
    CompositeSearchService,
    GoogleSearchService,
    PerplexitySearchService,
    build_search_service,
    get_search_service,
    reset_search_service,
)
from shared.config import Settings

from tests.stubs import StaticSearch, make_result


GOOGLE_RESPONSE = {
    "items": [
        {
            "title": "Raw title",
            "link": "https://example.com/a",
            "snippet": "Raw snippet",
            "pagemap": {
                "metatags": [
                    {
                        "og:title": "OG title",
                        "twitter:description": "Card description",
                    }
                ]
            },
        },
        {
            "title": "Plain title",
            "link": "https://example.com/b",
            "snippet": "Plain snippet",
        },
    ]
}


class TestGoogleSearchService:
    @pytest.mark.asyncio
    async def test_maps_items_and_prefers_metatags(self):
        """Should prefer og:title / twitter:description over the listing."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=GOOGLE_RESPONSE))
        service = GoogleSearchService("key", "engine", transport=transport)

        results = await service.search("climate policy")

        assert results == [
            SearchResult(
                title="OG title",
                link="https://example.com/a",
                snippet="Card description",
            ),
            SearchResult(
                title="Plain title",
                link="https://example.com/b",
                snippet="Plain snippet",
            ),
        ]

    @pytest.mark.asyncio
    async def test_result_pages_are_not_fetched(self):
        """Only the listing is requested; results carry no page content."""
        requested: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(request.url.host)
            return httpx.Response(200, json=GOOGLE_RESPONSE)

        service = GoogleSearchService("key", "engine", transport=httpx.MockTransport(handler))

        results = await service.search("climate policy")

        assert requested == ["www.googleapis.com"]
        assert [result.content for result in results] == ["", ""]

    @pytest.mark.asyncio
    async def test_request_parameters(self):
        """Should restrict to HTML pages and page three results at a time."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(dict(request.url.params))
            return httpx.Response(200, json={"items": []})

        service = GoogleSearchService("key", "engine", transport=httpx.MockTransport(handler))
        await service.search("rust vs go", page_number=2)

        assert seen["q"] == "rust vs go filetype:html"
        assert seen["key"] == "key"
        assert seen["cx"] == "engine"
        assert seen["start"] == "7"

    @pytest.mark.asyncio
    async def test_http_error_returns_empty(self):
        """Backend errors should never propagate."""
        transport = httpx.MockTransport(lambda request: httpx.Response(500, text="boom"))
        service = GoogleSearchService("key", "engine", transport=transport)

        assert await service.search("anything") == []

    @pytest.mark.asyncio
    async def test_missing_items_returns_empty(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        service = GoogleSearchService("key", "engine", transport=transport)

        assert await service.search("nothing") == []


class TestPerplexitySearchService:
    @pytest.mark.asyncio
    async def test_posts_query_and_maps_results(self):
        captured = {}
        long_text = "x" * 500

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"results": [{"title": "T", "url": "https://p.example/1", "snippet": long_text}]},
            )

        service = PerplexitySearchService(
            "pplx-key",
            base_url="https://api.perplexity.ai/",
            transport=httpx.MockTransport(handler),
        )
        results = await service.search("quantum")

        assert captured["url"] == "https://api.perplexity.ai/search"
        assert captured["auth"] == "Bearer pplx-key"
        assert captured["body"] == {
            "query": "quantum",
            "max_results": 10,
            "max_tokens_per_page": 2048,
        }
        assert len(results) == 1
        assert results[0].link == "https://p.example/1"
        assert results[0].snippet == "x" * 300
        assert results[0].content == long_text

    @pytest.mark.asyncio
    async def test_transport_error_returns_empty(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        service = PerplexitySearchService("k", transport=httpx.MockTransport(handler))

        assert await service.search("q") == []


class TestCompositeSearchService:
    @pytest.mark.asyncio
    async def test_merges_and_deduplicates_by_link(self):
        first = StaticSearch([make_result(1), make_result(2)])
        second = StaticSearch([make_result(2), make_result(3)])
        service = CompositeSearchService([first, second])

        results = await service.search("q", page_number=1)

        assert [r.link for r in results] == [
            "https://example.com/1",
            "https://example.com/2",
            "https://example.com/3",
        ]
        assert first.queries == [("q", 1)]
        assert second.queries == [("q", 1)]

    @pytest.mark.asyncio
    async def test_raising_backend_is_skipped(self):
        broken = StaticSearch(error=RuntimeError("down"))
        working = StaticSearch([make_result(1)])
        service = CompositeSearchService([broken, working])

        results = await service.search("q")

        assert [r.link for r in results] == ["https://example.com/1"]

    @pytest.mark.asyncio
    async def test_no_backends_returns_empty(self):
        assert await CompositeSearchService().search("q") == []

    def test_implements_interface(self):
        assert isinstance(CompositeSearchService(), ISearchService)


class TestBuildSearchService:
    def test_no_credentials_means_no_backends(self):
        service = build_search_service(Settings(_env_file=None))
        assert service.backends == []

    def test_google_needs_key_and_engine(self):
        settings = Settings(_env_file=None, google_search_api_key="k")
        assert build_search_service(settings).backends == []

    def test_all_configured_backends(self):
        settings = Settings(
            _env_file=None,
            google_search_api_key="k",
            google_search_engine_id="e",
            perplexity_api_key="p",
        )
        backends = build_search_service(settings).backends

        assert [type(b) for b in backends] == [GoogleSearchService, PerplexitySearchService]


class TestSingleton:
    def test_get_search_service_is_cached(self):
        reset_search_service()
        assert get_search_service() is get_search_service()
