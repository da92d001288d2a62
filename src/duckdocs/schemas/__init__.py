"""Shared schemas for duckdocs."""

from duckdocs.schemas.docs import DocInfo
from duckdocs.schemas.search import (
    FunctionDoc,
    FuzzySearchResult,
    MatchField,
    SearchMode,
    SearchResult,
    SQLSyntaxDoc,
)
from duckdocs.schemas.sections import Section
from duckdocs.schemas.tools import (
    FunctionListResponse,
    NotFoundResponse,
    RefreshResponse,
    SearchDocsResponse,
    SectionSummary,
)

__all__ = [
    "DocInfo",
    "FunctionDoc",
    "FunctionListResponse",
    "FuzzySearchResult",
    "MatchField",
    "NotFoundResponse",
    "RefreshResponse",
    "SQLSyntaxDoc",
    "SearchDocsResponse",
    "SearchMode",
    "SearchResult",
    "Section",
    "SectionSummary",
]
