"""Response models returned by the documentation tools."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from duckdocs.schemas.search import SearchMode, SearchResult


class SearchDocsResponse(BaseModel):
    """Response for a keyword search over the documentation."""

    query: str
    mode: SearchMode
    count: int
    results: list[SearchResult] = Field(default_factory=list)


class SectionSummary(BaseModel):
    """Compact listing entry for a section."""

    id: str
    title: str
    level: int
    has_children: bool


class FunctionListResponse(BaseModel):
    """All function names mentioned in the documentation."""

    count: int
    functions: list[str] = Field(default_factory=list)


class NotFoundResponse(BaseModel):
    """Returned instead of raising when a heuristic lookup finds nothing."""

    error: str
    query: str
    suggestion: str = "Try searching with search_docs for related documentation"


class RefreshResponse(BaseModel):
    """Outcome of a forced documentation refresh."""

    success: bool
    message: str
    section_count: int
    content_size: int
    updated_at: datetime | None = None
