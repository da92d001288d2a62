"""Tests for the documentation search engine."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from duckdocs.parser import parse_markdown_sections
from duckdocs.schemas import Section
from duckdocs.search_engine import (
    FUNCTION_STOPWORDS,
    SQL_SYNTAX_PLACEHOLDER,
    extract_snippet,
    find_function,
    find_sql_syntax,
    fuzzy_score,
    fuzzy_search,
    list_functions,
    search_sections,
)

SCENARIO_DOCS = "# A\ntext a\n## B\ntext b\n# C\ntext c"


def _section(id: str, title: str, content: str = "", level: int = 1) -> Section:
    return Section(id=id, title=title, level=level, content=content, start_line=0, end_line=0)


@pytest.fixture
def scenario_sections() -> list[Section]:
    """Three sections: A, B nested under A, and C."""
    return parse_markdown_sections(SCENARIO_DOCS)


class TestSearchSections:
    """Tests for search_sections function."""

    def test_content_only_match(self, scenario_sections: list[Section]) -> None:
        """A content hit scores 5 and is tagged as content."""
        results = search_sections("text b", scenario_sections, mode="all")

        assert len(results) == 1
        assert results[0].section.id == "b"
        assert results[0].score == 5
        assert results[0].matches == ["content"]

    def test_title_and_content_match(self) -> None:
        """A section matching in both places scores 15 with both tags."""
        sections = [_section("joins", "Joins", "How joins work")]

        results = search_sections("join", sections, mode="all")

        assert results[0].score == 15
        assert results[0].matches == ["title", "content"]

    def test_title_mode_only_tags_title(self) -> None:
        """Title mode ignores content matches."""
        sections = [
            _section("joins", "Joins", "How joins work"),
            _section("other", "Other", "mentions join here"),
        ]

        results = search_sections("join", sections, mode="title")

        assert [r.section.id for r in results] == ["joins"]
        assert all(r.matches == ["title"] for r in results)
        assert results[0].score == 10

    def test_content_mode_only_tags_content(self) -> None:
        """Content mode ignores title matches."""
        sections = [
            _section("joins", "Joins", "nothing relevant"),
            _section("other", "Other", "mentions join here"),
        ]

        results = search_sections("join", sections, mode="content")

        assert [r.section.id for r in results] == ["other"]
        assert results[0].matches == ["content"]

    def test_case_insensitive(self) -> None:
        """Matching ignores case in query and text."""
        sections = [_section("s", "SELECT Statement", "Use SELECT")]

        results = search_sections("select", sections)

        assert results[0].score == 15

    def test_sorted_by_score_then_document_order(self) -> None:
        """Higher scores come first; ties keep document order."""
        sections = [
            _section("first", "First", "parquet files"),
            _section("second", "Parquet", "parquet again"),
            _section("third", "Third", "more parquet"),
        ]

        results = search_sections("parquet", sections)

        assert [r.section.id for r in results] == ["second", "first", "third"]
        assert [r.score for r in results] == [15, 5, 5]

    def test_respects_limit(self) -> None:
        """Results are truncated to the limit."""
        sections = [_section(f"s{i}", f"Match {i}") for i in range(5)]

        results = search_sections("match", sections, limit=2)

        assert [r.section.id for r in results] == ["s0", "s1"]

    def test_snippets_built_only_for_returned_results(self) -> None:
        """Sections cut by the limit never get a snippet extracted."""
        sections = [_section(f"s{i}", f"Match {i}", f"match body {i}") for i in range(20)]

        with patch("duckdocs.search_engine.extract_snippet", wraps=extract_snippet) as mock_snippet:
            results = search_sections("match", sections, limit=3)

        assert len(results) == 3
        assert mock_snippet.call_count == 3
        assert results[0].snippet == "match body 0"

    def test_no_matches(self, scenario_sections: list[Section]) -> None:
        """Sections without a hit are dropped."""
        assert search_sections("parquet", scenario_sections) == []

    def test_attaches_snippet(self) -> None:
        """Each result carries a snippet around the match."""
        sections = [_section("s", "Title", "The COPY statement moves data.")]

        results = search_sections("copy", sections)

        assert results[0].snippet == "The COPY statement moves data."


class TestExtractSnippet:
    """Tests for extract_snippet function."""

    def test_query_missing_returns_prefix(self) -> None:
        """Without a match the start of the content is returned with an ellipsis."""
        assert extract_snippet("hello world", "zzz") == "hello world..."

    def test_query_missing_truncates_long_content(self) -> None:
        """The fallback prefix is capped at context_chars."""
        content = "x" * 300

        assert extract_snippet(content, "zzz") == "x" * 100 + "..."

    def test_short_content_has_no_ellipsis(self) -> None:
        """A window covering the whole content is returned as is."""
        assert extract_snippet("hello world", "WORLD") == "hello world"

    def test_window_around_match(self) -> None:
        """Long content is cut on both sides of the match."""
        content = "a" * 200 + "needle" + "b" * 200

        snippet = extract_snippet(content, "needle")

        assert snippet == "..." + "a" * 50 + "needle" + "b" * 50 + "..."

    def test_match_near_start(self) -> None:
        """No leading ellipsis when the window starts at the beginning."""
        content = "needle" + "b" * 200

        snippet = extract_snippet(content, "needle", context_chars=20)

        assert snippet == "needle" + "b" * 10 + "..."

    def test_match_near_end(self) -> None:
        """No trailing ellipsis when the window reaches the end."""
        content = "a" * 200 + "needle"

        snippet = extract_snippet(content, "needle", context_chars=20)

        assert snippet == "..." + "a" * 10 + "needle"


class TestFuzzyScore:
    """Tests for fuzzy_score function."""

    def test_subsequence_counts_characters(self) -> None:
        """Each query character found in order adds a point."""
        assert fuzzy_score("abc", "xaxbxc") == 3

    def test_exact_substring_gets_bonus(self) -> None:
        """A contiguous match adds twice the query length."""
        assert fuzzy_score("abc", "xxabcxx") == 3 + 6

    def test_case_insensitive(self) -> None:
        """Scoring ignores case."""
        assert fuzzy_score("ABC", "abc") == fuzzy_score("abc", "ABC") == 9

    def test_no_characters_in_order(self) -> None:
        """Zero when the query's first character never occurs."""
        assert fuzzy_score("xyz", "abc") == 0

    def test_partial_subsequence(self) -> None:
        """Out-of-order characters are not counted."""
        assert fuzzy_score("cab", "abc") == 1

    def test_substring_score_is_at_least_bonus(self) -> None:
        """A verbatim match always scores at least twice the query length."""
        query = "read_csv"

        assert fuzzy_score(query, "Use READ_CSV to load files") >= 2 * len(query)


class TestFuzzySearch:
    """Tests for fuzzy_search function."""

    def test_tolerates_typos(self) -> None:
        """A misspelled query still finds the intended section."""
        sections = [
            _section("window", "Window Functions"),
            _section("joins", "Joins"),
        ]

        results = fuzzy_search("windw", sections)

        assert results[0].section.id == "window"
        assert results[0].matched_in == "title"

    def test_content_score_is_halved(self) -> None:
        """Content matches count half and are reported as content hits."""
        sections = [_section("s", "Zzz", "the parquet reader")]

        results = fuzzy_search("parquet", sections)

        assert results[0].score == (7 + 14) // 2
        assert results[0].matched_in == "content"

    def test_tie_reports_title(self) -> None:
        """Equal title and content scores count as a title match."""
        sections = [_section("s", "ab", "axbxcxd")]

        results = fuzzy_search("abcd", sections)

        assert results[0].score == 2
        assert results[0].matched_in == "title"

    def test_excludes_zero_scores_and_limits(self) -> None:
        """Non-matching sections are dropped and the limit applies."""
        sections = [
            _section("a", "alpha"),
            _section("b", "alphabet"),
            _section("z", "zzz"),
        ]

        results = fuzzy_search("alpha", sections, limit=1)

        assert [r.section.id for r in results] == ["a"]
        assert all(r.section.id != "z" for r in fuzzy_search("alpha", sections))


class TestFindFunction:
    """Tests for find_function function."""

    def test_finds_by_title(self, sample_sections: list[Section]) -> None:
        """The section titled after the function is returned with its content."""
        function_doc = find_function("read_csv", sample_sections)

        section = next(s for s in sample_sections if s.title == "read_csv Function")
        assert function_doc is not None
        assert function_doc.name == "read_csv Function"
        assert function_doc.description == section.content
        assert function_doc.section_id == "read-csv-function"

    def test_extracts_details(self, sample_sections: list[Section]) -> None:
        """Signature, parameters and return type are scraped from the content."""
        function_doc = find_function("READ_CSV", sample_sections)

        assert function_doc is not None
        assert function_doc.signature == "read_csv(path, header := true)"
        assert function_doc.parameters == ["Parameter", "path", "header"]
        assert function_doc.return_type == "Table"

    def test_matches_title_with_spaces(self) -> None:
        """Underscores in the name also match spaces in the title."""
        sections = [_section("agg", "List Aggregate Functions", "Aggregates lists.")]

        function_doc = find_function("list_aggregate", sections)

        assert function_doc is not None
        assert function_doc.section_id == "agg"

    def test_falls_back_to_content(self, sample_sections: list[Section]) -> None:
        """A call in the content is found when no title matches."""
        function_doc = find_function("lower", sample_sections)

        assert function_doc is not None
        assert function_doc.section_id == "string-functions"

    def test_falls_back_to_backticked_name(self, sample_sections: list[Section]) -> None:
        """A backtick-quoted name in the content also counts."""
        function_doc = find_function("concat", sample_sections)

        assert function_doc is not None
        assert function_doc.section_id == "string-functions"

    def test_missing_details_are_empty(self) -> None:
        """Extraction failures leave fields empty instead of raising."""
        sections = [_section("f", "abs Function", "Absolute value.")]

        function_doc = find_function("abs", sections)

        assert function_doc is not None
        assert function_doc.signature is None
        assert function_doc.parameters == []
        assert function_doc.return_type is None

    def test_not_found(self, sample_sections: list[Section]) -> None:
        """Unknown functions return None."""
        assert find_function("no_such_function", sample_sections) is None


class TestListFunctions:
    """Tests for list_functions function."""

    def test_lists_called_names(self, sample_sections: list[Section]) -> None:
        """Names followed by a parenthesis are collected and sorted."""
        assert list_functions(sample_sections) == ["concat", "lower", "read_csv", "upper"]

    def test_excludes_stopwords_and_short_names(self) -> None:
        """Stopwords and names of two characters or fewer are dropped."""
        sections = [_section("s", "S", "from(x) the(y) ab(z) to(a) count(*) count(x)")]

        functions = list_functions(sections)

        assert functions == ["count"]
        assert not FUNCTION_STOPWORDS & set(functions)

    def test_empty_sections(self) -> None:
        """No sections means no functions."""
        assert list_functions([]) == []


class TestFindSQLSyntax:
    """Tests for find_sql_syntax function."""

    def test_finds_statement_section(self, sample_sections: list[Section]) -> None:
        """Free text is reduced to a keyword and the statement section is found."""
        syntax_doc = find_sql_syntax("CREATE TABLE", sample_sections)

        assert syntax_doc is not None
        assert syntax_doc.statement == "CREATE"
        assert syntax_doc.syntax == "CREATE TABLE t1 (i INTEGER);"
        assert syntax_doc.section_id == "create-table-statement"

    def test_extracts_tagged_code_block(self, sample_sections: list[Section]) -> None:
        """A ```sql block containing the keyword becomes the syntax."""
        syntax_doc = find_sql_syntax("how do I select rows", sample_sections)

        assert syntax_doc is not None
        assert syntax_doc.statement == "SELECT"
        assert syntax_doc.syntax == "SELECT * FROM tbl WHERE x > 1;"

    def test_top_level_title_matches_without_marker(self) -> None:
        """Level 1-2 sections naming the keyword match without "statement"."""
        sections = [
            _section("deep", "Pragma details", level=3),
            _section("pragmas", "Pragmas", "Configure things.", level=2),
        ]

        syntax_doc = find_sql_syntax("pragma", sections)

        assert syntax_doc is not None
        assert syntax_doc.section_id == "pragmas"

    def test_falls_back_to_content(self) -> None:
        """Content that shows the keyword's syntax is used when no title matches."""
        sections = [
            _section("intro", "Intro", "Nothing here.", level=3),
            _section("dml", "Data Changes", "The syntax is:\n\n```\nINSERT INTO t VALUES (1);\n```", level=3),
        ]

        syntax_doc = find_sql_syntax("insert", sections)

        assert syntax_doc is not None
        assert syntax_doc.section_id == "dml"
        assert syntax_doc.syntax == "INSERT INTO t VALUES (1);"

    def test_placeholder_without_code_block(self) -> None:
        """A matching section without a code block gets the placeholder syntax."""
        sections = [_section("alter", "ALTER TABLE Statement", "Changes a table.", level=3)]

        syntax_doc = find_sql_syntax("alter", sections)

        assert syntax_doc is not None
        assert syntax_doc.syntax == SQL_SYNTAX_PLACEHOLDER
        assert syntax_doc.description == "Changes a table."

    def test_unknown_statement_uses_input(self) -> None:
        """Input without a known keyword is searched for as is."""
        sections = [_section("summarize", "SUMMARIZE Statement", level=3)]

        syntax_doc = find_sql_syntax("Summarize", sections)

        assert syntax_doc is not None
        assert syntax_doc.statement == "SUMMARIZE"

    def test_not_found(self, sample_sections: list[Section]) -> None:
        """Returns None when nothing mentions the statement."""
        assert find_sql_syntax("vacuum", sample_sections) is None
