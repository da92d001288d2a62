"""duckdocs: index and search the DuckDB documentation."""

from duckdocs.config import DocsConfig
from duckdocs.docs_manager import DocsManager
from duckdocs.exceptions import (
    DuckDocsError,
    FetchError,
    InvalidSourceLocationError,
    SectionNotFoundError,
    UndecodableContentError,
)
from duckdocs.parser import parse_markdown_sections
from duckdocs.schemas import (
    DocInfo,
    FunctionDoc,
    FuzzySearchResult,
    SearchResult,
    Section,
    SQLSyntaxDoc,
)
from duckdocs.search_engine import (
    find_function,
    find_sql_syntax,
    fuzzy_search,
    list_functions,
    search_sections,
)
from duckdocs.tools import DocsTools

__all__ = [
    "DocInfo",
    "DocsConfig",
    "DocsManager",
    "DocsTools",
    "DuckDocsError",
    "FetchError",
    "FunctionDoc",
    "FuzzySearchResult",
    "InvalidSourceLocationError",
    "SQLSyntaxDoc",
    "SearchResult",
    "Section",
    "SectionNotFoundError",
    "UndecodableContentError",
    "find_function",
    "find_sql_syntax",
    "fuzzy_search",
    "list_functions",
    "parse_markdown_sections",
    "search_sections",
]
