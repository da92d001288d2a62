"""HTTP utilities for fetching content with retry logic and connection pooling."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from duckdocs.config import (
    DUCKDOCS_FETCH_BACKOFF_S,
    DUCKDOCS_FETCH_MAX_RETRIES,
    DUCKDOCS_FETCH_TIMEOUT_S,
    DUCKDOCS_USER_AGENT,
)
from duckdocs.exceptions import FetchError, InvalidSourceLocationError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_ALLOWED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
_MAX_REDIRECTS: Final[int] = 5


def validate_url(url: str) -> httpx.URL:
    """Parse ``url`` and make sure it can be fetched over HTTP(S).

    Raises:
        InvalidSourceLocationError: If the URL is malformed, has no host,
            or uses a scheme other than http/https.
    """
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidSourceLocationError(f"Invalid documentation URL {url!r}: {exc}") from exc
    if parsed.scheme not in _ALLOWED_SCHEMES or not parsed.host:
        raise InvalidSourceLocationError(f"Invalid documentation URL {url!r}")
    return parsed


async def fetch_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """Fetch the raw body of a URL, retrying transient failures.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.

    Returns:
        The response body as bytes.

    Raises:
        InvalidSourceLocationError: If the URL cannot be fetched at all.
        FetchError: If the resource does not exist (404) or the fetch
            fails after all retries.
    """
    validate_url(url)
    timeout = httpx.Timeout(DUCKDOCS_FETCH_TIMEOUT_S)
    headers = {"User-Agent": DUCKDOCS_USER_AGENT}
    last_exc: Exception | None = None

    async def do_fetch(http_client: httpx.AsyncClient) -> bytes:
        nonlocal last_exc

        for attempt in range(DUCKDOCS_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)
            except (httpx.UnsupportedProtocol, httpx.InvalidURL) as exc:
                raise InvalidSourceLocationError(f"Cannot fetch {url}: {exc}") from exc
            except httpx.RequestError as exc:
                last_exc = exc
            else:
                if response.status_code == 404:
                    raise FetchError(f"Documentation not found at {url}")
                if response.status_code in RETRY_STATUS_CODES:
                    last_exc = FetchError(f"HTTP {response.status_code} from {url}")
                else:
                    try:
                        response.raise_for_status()
                    except httpx.HTTPStatusError as exc:
                        raise FetchError(f"HTTP {response.status_code} from {url}") from exc
                    return response.content

            logger.debug("Fetch attempt %d for %s failed: %s", attempt + 1, url, last_exc)
            if attempt < DUCKDOCS_FETCH_MAX_RETRIES:
                backoff = DUCKDOCS_FETCH_BACKOFF_S * (2**attempt)
                await asyncio.sleep(backoff)

        raise FetchError(f"Failed to fetch {url}: {last_exc}")

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)
