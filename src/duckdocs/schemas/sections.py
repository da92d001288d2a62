"""Section models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Section(BaseModel):
    """A heading of the documentation and the text up to the next heading.

    ``parent_id`` is a key into the same section list, not a nested object.
    ``children`` is left empty by the parser and only filled on copies handed
    out by :meth:`duckdocs.docs_manager.DocsManager.get_section`.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    level: int = Field(..., ge=1, le=6)
    content: str
    start_line: int = Field(..., ge=0)
    end_line: int
    parent_id: str | None = None
    children: list["Section"] = Field(default_factory=list)
