"""Documentation status model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class DocInfo(BaseModel):
    """Snapshot of the loaded documentation.

    Attributes:
        source: URL the documentation is fetched from.
        cache_path: Location of the local cached copy.
        last_updated: When the loaded content was fetched or cached, if known.
        section_count: Number of parsed sections.
        content_size: Length of the raw documentation text in characters.
        is_loaded: Whether a load has completed successfully.
    """

    source: str
    cache_path: str
    last_updated: datetime | None = None
    section_count: int
    content_size: int
    is_loaded: bool
