"""Search algorithms over parsed documentation sections.

All functions are pure: they take the section list as an argument and keep
no state, so they are safe to call concurrently on a snapshot of the list.
Result ordering always falls back to document order for equal scores.
"""

from __future__ import annotations

import re
from typing import Final, Sequence

from duckdocs.extractors import (
    extract_code_block,
    extract_parameters,
    extract_return_type,
    extract_signature,
)
from duckdocs.schemas import (
    FunctionDoc,
    FuzzySearchResult,
    MatchField,
    SearchMode,
    SearchResult,
    Section,
    SQLSyntaxDoc,
)

TITLE_MATCH_SCORE: Final[int] = 10
CONTENT_MATCH_SCORE: Final[int] = 5
DEFAULT_SNIPPET_CHARS: Final[int] = 100
SQL_SYNTAX_PLACEHOLDER: Final[str] = "See documentation"

SQL_KEYWORDS: Final[tuple[str, ...]] = (
    "select",
    "insert",
    "update",
    "delete",
    "create",
    "drop",
    "alter",
    "copy",
    "export",
    "import",
    "attach",
    "detach",
    "use",
    "describe",
    "explain",
    "analyze",
    "vacuum",
    "checkpoint",
    "pragma",
    "set",
)
_SQL_TITLE_MARKERS: Final[tuple[str, ...]] = ("statement", "syntax", "clause")

# Words that look like calls in prose ("the (...)") but are not functions.
FUNCTION_STOPWORDS: Final[frozenset[str]] = frozenset(
    {
        "the", "and", "for", "from", "with", "this", "that", "are", "was", "were",
        "has", "have", "had", "not", "all", "can", "but", "use", "set", "get",
    }
)
_FUNCTION_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"([a-z_]+)\("),
    re.compile(r"`([a-z_]+)`\("),
)
_MIN_FUNCTION_NAME_LENGTH: Final[int] = 3


def search_sections(
    query: str,
    sections: Sequence[Section],
    *,
    mode: SearchMode = "all",
    limit: int = 10,
) -> list[SearchResult]:
    """Case-insensitive substring search over titles and/or content.

    A title hit scores 10 and a content hit scores 5, so a section matching
    both scores 15.

    Args:
        query: Text to look for.
        sections: Sections in document order.
        mode: Restrict matching to "title", "content", or search "all".
        limit: Maximum number of results.

    Returns:
        Results sorted by score, highest first.
    """
    lower_query = query.lower()
    results: list[tuple[Section, int, list[MatchField]]] = []

    for section in sections:
        score = 0
        matches = []
        if mode in ("title", "all") and lower_query in section.title.lower():
            score += TITLE_MATCH_SCORE
            matches.append("title")
        if mode in ("content", "all") and lower_query in section.content.lower():
            score += CONTENT_MATCH_SCORE
            matches.append("content")
        if score > 0:
            results.append((section, score, matches))

    results.sort(key=lambda result: result[1], reverse=True)
    # Snippets only for the results actually returned.
    return [
        SearchResult(
            section=section,
            score=score,
            matches=matches,
            snippet=extract_snippet(section.content, query),
        )
        for section, score, matches in results[: max(limit, 0)]
    ]


def extract_snippet(content: str, query: str, context_chars: int = DEFAULT_SNIPPET_CHARS) -> str:
    """Cut a window of ``content`` around the first match of ``query``.

    Ellipses mark each side where the window was cut. Without a match the
    leading ``context_chars`` characters are returned.
    """
    match_start = content.lower().find(query.lower())
    if match_start < 0:
        return content[:context_chars] + "..."

    half = context_chars // 2
    snippet_start = max(0, match_start - half)
    snippet_end = min(len(content), match_start + len(query) + half)

    snippet = content[snippet_start:snippet_end]
    if snippet_start > 0:
        snippet = "..." + snippet
    if snippet_end < len(content):
        snippet = snippet + "..."
    return snippet


def fuzzy_score(query: str, target: str) -> int:
    """Score how well ``query`` matches ``target`` while tolerating typos.

    One point per query character found in order within the target, plus a
    bonus of twice the query length when the query occurs verbatim. Both
    strings are compared lowercased.
    """
    query = query.lower()
    target = target.lower()
    score = 0
    query_index = 0

    for char in target:
        if query_index < len(query) and char == query[query_index]:
            score += 1
            query_index += 1

    if query and query in target:
        score += len(query) * 2
    return score


def fuzzy_search(query: str, sections: Sequence[Section], limit: int = 10) -> list[FuzzySearchResult]:
    """Rank sections with :func:`fuzzy_score`; content matches count half."""
    results: list[FuzzySearchResult] = []

    for section in sections:
        title_score = fuzzy_score(query, section.title)
        content_score = fuzzy_score(query, section.content) // 2
        total_score = max(title_score, content_score)
        if total_score > 0:
            results.append(
                FuzzySearchResult(
                    section=section,
                    score=total_score,
                    matched_in="content" if content_score > title_score else "title",
                )
            )

    results.sort(key=lambda result: result.score, reverse=True)
    return results[: max(limit, 0)]


def find_function(name: str, sections: Sequence[Section]) -> FunctionDoc | None:
    """Locate the documentation for a function such as ``read_csv``.

    Titles are searched first (``read_csv`` also matches "read csv"), then
    content mentioning ``read_csv(`` or ```read_csv```.
    """
    lower_name = name.lower()
    spaced_name = lower_name.replace("_", " ")

    for section in sections:
        lower_title = section.title.lower()
        if lower_name in lower_title or spaced_name in lower_title:
            return _function_doc_from(section)

    call_marker = f"{lower_name}("
    code_marker = f"`{lower_name}`"
    for section in sections:
        lower_content = section.content.lower()
        if call_marker in lower_content or code_marker in lower_content:
            return _function_doc_from(section)

    return None


def list_functions(sections: Sequence[Section]) -> list[str]:
    """Return the sorted, de-duplicated names that appear called in the docs."""
    functions: set[str] = set()
    for section in sections:
        for pattern in _FUNCTION_PATTERNS:
            for match in pattern.finditer(section.content):
                name = match.group(1)
                if len(name) >= _MIN_FUNCTION_NAME_LENGTH and name.lower() not in FUNCTION_STOPWORDS:
                    functions.add(name)
    return sorted(functions)


def find_sql_syntax(statement: str, sections: Sequence[Section]) -> SQLSyntaxDoc | None:
    """Find the syntax reference for a SQL statement like "CREATE TABLE".

    The input is reduced to the first known statement keyword it contains.
    Sections whose title names the keyword together with "statement",
    "syntax" or "clause" (or any top-level section naming it) win; otherwise
    the first section whose content discusses the keyword's syntax is used.
    """
    lower_statement = statement.lower()
    keyword = next((kw for kw in SQL_KEYWORDS if kw in lower_statement), lower_statement)

    for section in sections:
        lower_title = section.title.lower()
        if keyword in lower_title and (
            any(marker in lower_title for marker in _SQL_TITLE_MARKERS) or section.level <= 2
        ):
            return _sql_syntax_doc_from(section, keyword)

    for section in sections:
        lower_content = section.content.lower()
        if f"{keyword} " in lower_content and "syntax" in lower_content:
            return _sql_syntax_doc_from(section, keyword)

    return None


def _function_doc_from(section: Section) -> FunctionDoc:
    return FunctionDoc(
        name=section.title,
        signature=extract_signature(section.content),
        description=section.content,
        parameters=extract_parameters(section.content),
        return_type=extract_return_type(section.content),
        section_id=section.id,
    )


def _sql_syntax_doc_from(section: Section, keyword: str) -> SQLSyntaxDoc:
    syntax = extract_code_block(section.content, containing=keyword)
    return SQLSyntaxDoc(
        statement=keyword.upper(),
        syntax=syntax or SQL_SYNTAX_PLACEHOLDER,
        description=section.content,
        section_id=section.id,
    )
