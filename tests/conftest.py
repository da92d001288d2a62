"""Test setup for duckdocs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from duckdocs.parser import parse_markdown_sections  # noqa: E402
from duckdocs.schemas import Section  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


SAMPLE_DOCS = """\
Preamble text that belongs to no section.

# Getting Started {#getting-started}

DuckDB is an in-process analytical database.

## Installation

Install with `pip install duckdb`.

# SQL Reference

## SELECT Statement

The SELECT statement retrieves rows from the database.

```sql
SELECT * FROM tbl WHERE x > 1;
```

## CREATE TABLE Statement

```sql
CREATE TABLE t1 (i INTEGER);
```

# Functions

## read_csv Function

Reads a CSV file. Returns a `Table` of rows.

```
read_csv(path, header := true)
```

| Parameter | Description |
|-----------|-------------|
| `path` | File to read |
| `header` | Whether the file has a header row |

## String Functions

Use lower(s) and upper(s) to change case, or call `concat`(a, b).
"""


@pytest.fixture
def sample_docs() -> str:
    """A small DuckDB-like documentation bundle."""
    return SAMPLE_DOCS


@pytest.fixture
def sample_sections() -> list[Section]:
    """Sections parsed from :data:`SAMPLE_DOCS`."""
    return parse_markdown_sections(SAMPLE_DOCS)


@pytest.fixture
def network_timeout() -> float:
    """Default timeout for network operations in seconds."""
    return 60.0
