"""Parse Markdown documentation into a flat, ordered list of sections."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from duckdocs.schemas import Section

_MAX_HEADING_LEVEL = 6
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_ANCHOR_RE = re.compile(r"\{#([^}]+)\}")
_ANCHOR_WITH_SPACE_RE = re.compile(r"\s*\{#[^}]+\}\s*")


@dataclass
class ParsedHeading:
    """A heading line split into its parts."""

    title: str
    level: int
    anchor: str | None = None


@dataclass
class _OpenSection:
    id: str
    title: str
    level: int
    start_line: int
    parent_id: str | None
    lines: list[str] = field(default_factory=list)

    def close(self, end_line: int) -> Section:
        return Section(
            id=self.id,
            title=self.title,
            level=self.level,
            content="\n".join(self.lines).strip(),
            start_line=self.start_line,
            end_line=end_line,
            parent_id=self.parent_id,
        )


def parse_heading(line: str) -> ParsedHeading | None:
    """Recognize an ATX heading (``#`` to ``######``) with an optional ``{#anchor}``.

    Returns None for lines that are not headings, including headings whose
    title is empty once the anchor marker is removed.
    """
    stripped = line.strip()
    level = len(stripped) - len(stripped.lstrip("#"))
    if level == 0 or level > _MAX_HEADING_LEVEL:
        return None

    remainder = stripped[level:].strip()
    anchor = None
    match = _ANCHOR_RE.search(remainder)
    if match:
        anchor = match.group(1)
        remainder = _ANCHOR_WITH_SPACE_RE.sub(" ", remainder, count=1).strip()

    if not remainder:
        return None
    return ParsedHeading(title=remainder, level=level, anchor=anchor)


def slugify(title: str) -> str:
    """Generate a URL-safe id from a heading title."""
    normalized = title.lower().replace(" ", "-").replace("_", "-")
    return "".join(char for char in normalized if char.isalnum() or char == "-")


def parse_markdown_sections(text: str) -> list[Section]:
    """Split Markdown text into sections in document order.

    Each heading starts a section that runs until the next heading of any
    level. ``parent_id`` points at the nearest earlier section with a smaller
    level. Text before the first heading belongs to no section and is dropped.
    Generated ids that repeat get a numeric suffix (``intro``, ``intro-1``);
    explicit ``{#anchor}`` ids are used as written.

    Never raises: malformed Markdown just yields fewer sections.
    """
    lines = _LINE_BREAK_RE.split(text)
    sections: list[Section] = []
    seen_ids: set[str] = set()
    parent_stack: list[tuple[str, int]] = []
    current: _OpenSection | None = None

    for index, line in enumerate(lines):
        heading = parse_heading(line)
        if heading is None:
            if current is not None:
                current.lines.append(line)
            continue

        if current is not None:
            sections.append(current.close(end_line=index - 1))

        while parent_stack and parent_stack[-1][1] >= heading.level:
            parent_stack.pop()
        parent_id = parent_stack[-1][0] if parent_stack else None

        section_id = heading.anchor or _unique_slug(slugify(heading.title), seen_ids)
        seen_ids.add(section_id)
        parent_stack.append((section_id, heading.level))
        current = _OpenSection(
            id=section_id,
            title=heading.title,
            level=heading.level,
            start_line=index,
            parent_id=parent_id,
        )

    if current is not None:
        sections.append(current.close(end_line=len(lines) - 1))

    return sections


def _unique_slug(slug: str, seen_ids: set[str]) -> str:
    if slug not in seen_ids:
        return slug
    suffix = 1
    while f"{slug}-{suffix}" in seen_ids:
        suffix += 1
    return f"{slug}-{suffix}"
