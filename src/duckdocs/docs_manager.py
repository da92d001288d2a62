"""Load, cache, and serve the parsed documentation."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Callable

from duckdocs.cache_utils import FileCache
from duckdocs.config import DocsConfig
from duckdocs.fetch import fetch_docs
from duckdocs.parser import parse_markdown_sections
from duckdocs.schemas import DocInfo, SearchMode, SearchResult, Section
from duckdocs.search_engine import search_sections

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class _DocsState:
    raw_content: str = ""
    sections: tuple[Section, ...] = ()
    last_updated: datetime | None = None
    is_loaded: bool = False


_UNLOADED = _DocsState()


@dataclass
class DocsManager:
    """Owner of the loaded documentation.

    The raw text, parsed sections and timestamp live in one immutable state
    object that is swapped in a single assignment, so readers always see a
    consistent snapshot. ``initialize`` and ``refresh`` are serialized by a
    lock; reads never wait and never fail, returning empty results until the
    first successful load.

    Attributes:
        config: Source URL, cache location and cache TTL.
        fetcher: Coroutine function downloading the documentation text.
        cache: Cache medium for the downloaded text.
    """

    config: DocsConfig = field(default_factory=DocsConfig.from_env)
    fetcher: Fetcher = fetch_docs
    cache: FileCache | None = None
    _state: _DocsState = field(default=_UNLOADED, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.cache is None:
            self.cache = FileCache(self.config.cache_dir)

    @property
    def is_loaded(self) -> bool:
        return self._state.is_loaded

    async def initialize(self) -> None:
        """Load the documentation from a fresh cache, or download it.

        Raises:
            FetchError: If the cache is stale or missing and the download
                fails. The manager then stays unloaded.
        """
        async with self._lock:
            cached = await self._read_cache() if self._is_cache_valid() else None
            if cached is not None:
                raw_content, last_updated = cached
            else:
                logger.info("Documentation cache missing or stale, downloading")
                raw_content, last_updated = await self._download()
            self._install(raw_content, last_updated)

    async def refresh(self) -> None:
        """Download and re-parse the documentation, ignoring the cache.

        On failure the previously loaded documentation stays in place and the
        error is raised to the caller.
        """
        async with self._lock:
            try:
                raw_content, last_updated = await self._download()
            except Exception as exc:
                logger.warning("Documentation refresh failed, keeping previous state: %s", exc)
                raise
            self._install(raw_content, last_updated)

    def get_doc_info(self) -> DocInfo:
        state = self._state
        return DocInfo(
            source=self.config.source_url,
            cache_path=str(self.config.cache_path),
            last_updated=state.last_updated,
            section_count=len(state.sections),
            content_size=len(state.raw_content),
            is_loaded=state.is_loaded,
        )

    def get_raw_content(self) -> str:
        return self._state.raw_content

    def get_all_sections(self) -> list[Section]:
        return list(self._state.sections)

    def get_sections(self, level: int | None = None, parent_id: str | None = None) -> list[Section]:
        """Return sections matching the given level and/or parent, in order."""
        return [
            section
            for section in self._state.sections
            if (level is None or section.level == level)
            and (parent_id is None or section.parent_id == parent_id)
        ]

    def get_section(
        self,
        id: str | None = None,
        title: str | None = None,
        include_children: bool = True,
    ) -> Section | None:
        """Look a section up by exact id, or else by case-insensitive title substring.

        Args:
            id: Section id to match exactly. Takes precedence over ``title``.
            title: Text the section title must contain.
            include_children: Attach the direct child sections to the result.

        Returns:
            The first matching section in document order, or None.
        """
        sections = self._state.sections
        section = None
        if id is not None:
            section = next((s for s in sections if s.id == id), None)
        elif title is not None:
            lower_title = title.lower()
            section = next((s for s in sections if lower_title in s.title.lower()), None)

        if section is not None and include_children:
            children = [s for s in sections if s.parent_id == section.id]
            section = section.model_copy(update={"children": children})
        return section

    def search(self, query: str, mode: SearchMode = "all", limit: int = 10) -> list[SearchResult]:
        return search_sections(query, self._state.sections, mode=mode, limit=limit)

    def _is_cache_valid(self) -> bool:
        key = self.config.cache_file
        if not self.cache.exists(key):
            return False
        ttl = self.config.cache_ttl_seconds
        if ttl <= 0:
            return True
        try:
            return self.cache.age_of(key) < ttl
        except OSError:
            return False

    async def _read_cache(self) -> tuple[str, datetime] | None:
        key = self.config.cache_file
        try:
            raw_content = await self.cache.read(key)
            last_updated = self.cache.modified_at(key)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read documentation cache %s: %s", self.config.cache_path, exc)
            return None
        logger.info("Loaded documentation from cache %s", self.config.cache_path)
        return raw_content, last_updated

    async def _download(self) -> tuple[str, datetime]:
        raw_content = await self.fetcher(self.config.source_url)
        fetched_at = datetime.now(timezone.utc)
        try:
            await self.cache.write(self.config.cache_file, raw_content)
        except OSError as exc:
            logger.warning("Could not write documentation cache %s: %s", self.config.cache_path, exc)
        return raw_content, fetched_at

    def _install(self, raw_content: str, last_updated: datetime | None) -> None:
        sections = tuple(parse_markdown_sections(raw_content))
        self._state = _DocsState(
            raw_content=raw_content,
            sections=sections,
            last_updated=last_updated,
            is_loaded=True,
        )
        logger.info(
            "Documentation loaded",
            extra={"section_count": len(sections), "content_size": len(raw_content)},
        )
