"""Search result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from duckdocs.schemas.sections import Section

SearchMode = Literal["title", "content", "all"]
MatchField = Literal["title", "content"]


class SearchResult(BaseModel):
    """A keyword search hit."""

    section: Section
    score: int
    matches: list[MatchField] = Field(default_factory=list)
    snippet: str


class FuzzySearchResult(BaseModel):
    """A typo-tolerant search hit."""

    section: Section
    score: int
    matched_in: MatchField


class FunctionDoc(BaseModel):
    """Documentation scraped for a single SQL function."""

    name: str
    signature: str | None = None
    description: str
    parameters: list[str] = Field(default_factory=list)
    return_type: str | None = None
    section_id: str


class SQLSyntaxDoc(BaseModel):
    """Syntax documentation for a SQL statement."""

    statement: str
    syntax: str
    description: str
    section_id: str
