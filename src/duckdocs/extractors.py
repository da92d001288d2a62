"""Best-effort extraction of structured details from documentation prose.

Every helper returns None or an empty list when nothing matches; none of
them raise on unusual input.
"""

from __future__ import annotations

import re

_SIGNATURE_PATTERNS = (
    # Fenced block holding a call
    re.compile(r"```(?:[\w+-]+)?\n([^`]+\([^)]*\)[^`]*)\n```"),
    # Inline code holding a call
    re.compile(r"`([^`]+\([^)]*\))`"),
)
_PARAMETER_ROW_RE = re.compile(r"\|\s*`?([a-z_]+)`?\s*\|[^|]+\|", re.IGNORECASE)
_RETURN_TYPE_PATTERNS = (
    re.compile(r"(?i:returns?)\s+(?:(?i:an?)\s+)?`?([A-Z][A-Za-z]+)`?"),
    re.compile(r"(?:→|->)\s*`?([A-Z][A-Za-z]+)`?"),
)
_CODE_BLOCK_RE = re.compile(r"```(?:sql)?\n([^`]+)\n```", re.IGNORECASE)


def extract_signature(content: str) -> str | None:
    """Return the first fenced block or inline code span that looks like a call."""
    for pattern in _SIGNATURE_PATTERNS:
        match = pattern.search(content)
        if match:
            return match.group(1)
    return None


def extract_parameters(content: str) -> list[str]:
    """Collect first-column names from pipe-delimited table rows, in order."""
    return [match.group(1) for match in _PARAMETER_ROW_RE.finditer(content)]


def extract_return_type(content: str) -> str | None:
    """Find a capitalized type name after "returns" or an arrow."""
    for pattern in _RETURN_TYPE_PATTERNS:
        match = pattern.search(content)
        if match:
            return match.group(1)
    return None


def extract_code_block(content: str, containing: str) -> str | None:
    """Return the first fenced code block whose body mentions ``containing``."""
    needle = containing.lower()
    for match in _CODE_BLOCK_RE.finditer(content):
        block = match.group(1)
        if needle in block.lower():
            return block.strip()
    return None
