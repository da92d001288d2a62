"""Local configuration for duckdocs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


DEFAULT_DOCS_URL = "https://blobs.duckdb.org/docs/duckdb-docs.md"
DEFAULT_CACHE_DIR = "~/.cache/che-duckdb-mcp"
DEFAULT_CACHE_FILE = "duckdb-docs.md"
DEFAULT_CACHE_TTL_SECONDS = 24 * 60 * 60
DEFAULT_FETCH_TIMEOUT_S = 30.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "duckdocs/0.1"

DUCKDOCS_DOCS_URL = os.getenv("DUCKDOCS_DOCS_URL", DEFAULT_DOCS_URL)
# Shared with other tools that read the same documentation bundle.
DUCKDOCS_CACHE_PATH = Path(os.getenv("DUCKDOCS_CACHE_PATH", DEFAULT_CACHE_DIR)).expanduser().resolve()
DUCKDOCS_CACHE_FILE = os.getenv("DUCKDOCS_CACHE_FILE", DEFAULT_CACHE_FILE)
DUCKDOCS_CACHE_TTL_SECONDS = int(os.getenv("DUCKDOCS_CACHE_TTL_SECONDS", str(DEFAULT_CACHE_TTL_SECONDS)))
DUCKDOCS_FETCH_TIMEOUT_S = float(os.getenv("DUCKDOCS_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
DUCKDOCS_FETCH_MAX_RETRIES = int(os.getenv("DUCKDOCS_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
DUCKDOCS_FETCH_BACKOFF_S = float(os.getenv("DUCKDOCS_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
DUCKDOCS_USER_AGENT = os.getenv("DUCKDOCS_USER_AGENT", DEFAULT_USER_AGENT)


@dataclass(frozen=True)
class DocsConfig:
    """Where the documentation comes from and how long a cached copy is trusted.

    Attributes:
        source_url: URL of the Markdown documentation bundle.
        cache_dir: Directory holding the cached copy.
        cache_file: File name of the cached copy inside ``cache_dir``.
        cache_ttl_seconds: Maximum age of a usable cached copy. If <= 0,
            the cached copy never expires.
    """

    source_url: str = DEFAULT_DOCS_URL
    cache_dir: Path = Path(DEFAULT_CACHE_DIR).expanduser()
    cache_file: str = DEFAULT_CACHE_FILE
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS

    @property
    def cache_path(self) -> Path:
        return self.cache_dir / self.cache_file

    @classmethod
    def from_env(cls) -> "DocsConfig":
        """Build a config from the ``DUCKDOCS_*`` environment settings."""
        return cls(
            source_url=DUCKDOCS_DOCS_URL,
            cache_dir=DUCKDOCS_CACHE_PATH,
            cache_file=DUCKDOCS_CACHE_FILE,
            cache_ttl_seconds=DUCKDOCS_CACHE_TTL_SECONDS,
        )
