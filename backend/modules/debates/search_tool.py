"""
Search tool bound to a debate agent's turn.

The tool runs inside the provider call's internal tool loop, but each
search is reported to the orchestrator as soon as it finishes, not after
the turn completes.
"""

import logging
from typing import Callable

from langchain_core.tools import StructuredTool
from pydantic import BaseModel, Field

from modules.search.interfaces import ISearchService
from modules.search.models import SearchResult
from providers.base import ProviderId

from .context_builder import format_search_results
from .models import ToolInvocation

logger = logging.getLogger(__name__)

SEARCH_TOOL_NAME = "browse_internet"

SEARCH_TOOL_DESCRIPTION = (
    "Search the internet for information on a specific query. Returns search "
    "results with titles, descriptions, URLs and page content."
)


class SearchToolInput(BaseModel):
    """Arguments the model supplies to the search tool."""

    search_query: str = Field(
        ...,
        description=(
            "The search query to look up on the internet. Be specific and "
            "include relevant keywords for better results."
        ),
    )
    page_number: int = Field(
        default=0,
        ge=0,
        description="The page of search results to retrieve, starting at 0.",
    )


def build_search_tool(
    model: ProviderId,
    search: ISearchService,
    on_result: Callable[[ToolInvocation], None],
) -> StructuredTool:
    """
    Create the search tool for one agent's turn.

    Args:
        model: Provider whose turn the tool belongs to
        search: Search capability to query
        on_result: Called with the ToolInvocation event before the results
            are handed back to the model

    Returns:
        A LangChain tool the capability provider can bind
    """

    async def browse_internet(search_query: str, page_number: int = 0) -> str:
        try:
            results: list[SearchResult] = await search.search(search_query, page_number)
        except Exception as e:
            logger.warning(f"Search failed for {model.value} ({search_query}): {e}")
            results = []

        on_result(ToolInvocation(model=model, query=search_query, results=results))
        return format_search_results(results)

    return StructuredTool.from_function(
        coroutine=browse_internet,
        name=SEARCH_TOOL_NAME,
        description=SEARCH_TOOL_DESCRIPTION,
        args_schema=SearchToolInput,
    )
