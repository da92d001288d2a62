"""Documentation tools exposed to an agent.

Each method maps one tool call onto the manager and search engine and
returns a pydantic model ready for ``model_dump(mode="json")``.
"""

from __future__ import annotations

import logging
from typing import get_args

from duckdocs.docs_manager import DocsManager
from duckdocs.exceptions import SectionNotFoundError
from duckdocs.schemas import (
    DocInfo,
    FunctionDoc,
    FunctionListResponse,
    FuzzySearchResult,
    NotFoundResponse,
    RefreshResponse,
    SearchDocsResponse,
    SearchMode,
    Section,
    SectionSummary,
    SQLSyntaxDoc,
)
from duckdocs.search_engine import (
    find_function,
    find_sql_syntax,
    fuzzy_search,
    list_functions,
)

logger = logging.getLogger(__name__)

_SEARCH_MODES = get_args(SearchMode)


class DocsTools:
    """Tool handlers for the DuckDB documentation."""

    def __init__(self, manager: DocsManager) -> None:
        self.manager = manager

    async def search_docs(self, query: str, mode: str = "all", limit: int = 10) -> SearchDocsResponse:
        """Keyword search; an unknown mode searches titles and content."""
        search_mode = mode if mode in _SEARCH_MODES else "all"
        results = self.manager.search(query, mode=search_mode, limit=limit)
        return SearchDocsResponse(query=query, mode=search_mode, count=len(results), results=results)

    async def fuzzy_search_docs(self, query: str, limit: int = 10) -> list[FuzzySearchResult]:
        """Typo-tolerant search, for when keyword search comes back empty."""
        return fuzzy_search(query, self.manager.get_all_sections(), limit=limit)

    async def list_sections(self, level: int | None = None, parent: str | None = None) -> list[SectionSummary]:
        sections = self.manager.get_sections(level=level, parent_id=parent)
        parent_ids = {section.parent_id for section in self.manager.get_all_sections()}
        return [
            SectionSummary(
                id=section.id,
                title=section.title,
                level=section.level,
                has_children=section.id in parent_ids,
            )
            for section in sections
        ]

    async def get_section(
        self,
        id: str | None = None,
        title: str | None = None,
        include_children: bool = True,
    ) -> Section:
        """Fetch one section by id or title.

        Raises:
            SectionNotFoundError: If no section matches.
        """
        section = self.manager.get_section(id=id, title=title, include_children=include_children)
        if section is None:
            raise SectionNotFoundError(f"Section not found (id={id!r}, title={title!r})")
        return section

    async def get_function_docs(self, function_name: str) -> FunctionDoc | NotFoundResponse:
        function_doc = find_function(function_name, self.manager.get_all_sections())
        if function_doc is None:
            logger.info("No documentation found for function %s", function_name)
            return NotFoundResponse(error="Function not found", query=function_name)
        return function_doc

    async def list_functions(self) -> FunctionListResponse:
        functions = list_functions(self.manager.get_all_sections())
        return FunctionListResponse(count=len(functions), functions=functions)

    async def get_sql_syntax(self, statement: str) -> SQLSyntaxDoc | NotFoundResponse:
        syntax_doc = find_sql_syntax(statement, self.manager.get_all_sections())
        if syntax_doc is None:
            logger.info("No SQL syntax documentation found for %s", statement)
            return NotFoundResponse(error="SQL syntax not found", query=statement)
        return syntax_doc

    async def refresh_docs(self) -> RefreshResponse:
        """Force a re-download; fetch errors propagate to the caller."""
        await self.manager.refresh()
        info = self.manager.get_doc_info()
        return RefreshResponse(
            success=True,
            message="Documentation refreshed successfully",
            section_count=info.section_count,
            content_size=info.content_size,
            updated_at=info.last_updated,
        )

    async def get_doc_info(self) -> DocInfo:
        return self.manager.get_doc_info()
