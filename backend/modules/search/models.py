"""
Search module data models.
"""

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """A single ranked search hit."""

    model_config = {"frozen": True}

    title: str = Field(default="", description="Page title")
    link: str = Field(..., description="Page URL")
    snippet: str = Field(default="", description="Short description")
    content: str = Field(default="", description="Page text, if the backend provides it")
