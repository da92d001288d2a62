"""Fetch the documentation bundle over HTTP."""

from __future__ import annotations

import logging

import httpx

from duckdocs.exceptions import UndecodableContentError
from duckdocs.http_utils import fetch_with_retries

logger = logging.getLogger(__name__)


async def fetch_docs(url: str, *, client: httpx.AsyncClient | None = None) -> str:
    """Download the Markdown documentation and decode it as UTF-8.

    Args:
        url: URL of the documentation bundle.
        client: Optional shared httpx.AsyncClient.

    Returns:
        The documentation text.

    Raises:
        InvalidSourceLocationError: If ``url`` is not a fetchable HTTP(S) URL.
        FetchError: If the download fails after retries.
        UndecodableContentError: If the body is not valid UTF-8.
    """
    logger.info("Fetching documentation from %s", url)
    body = await fetch_with_retries(url, client=client)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise UndecodableContentError(f"Documentation at {url} is not valid UTF-8") from exc
    logger.info("Fetched %d characters of documentation from %s", len(text), url)
    return text
