"""Cache utilities for managing the local documentation copy."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from pathlib import Path


def cache_age_seconds(path: Path) -> float:
    """Return how long ago a cached file was last written.

    Args:
        path: Path to the cached file.

    Returns:
        Age in seconds, based on the file modification time.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    return (datetime.now(timezone.utc) - modified_at(path)).total_seconds()


def modified_at(path: Path) -> datetime:
    """Return the modification time of a file as an aware UTC datetime."""
    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def cache_key_path(key: str, base_path: Path) -> Path:
    """Map a cache key onto a file path below ``base_path``.

    Path separators in the key are flattened so every key stays a direct
    child of the cache directory.

    Args:
        key: The cache key (e.g., "duckdb-docs.md").
        base_path: The base cache directory path.

    Returns:
        Path to the cache file for this key.
    """
    return base_path / key.replace("/", "_").replace("\\", "_")


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read text from a file asynchronously using a thread pool.

    Args:
        path: Path to the file to read.
        encoding: Text encoding to use.

    Returns:
        The file contents as a string.
    """
    return await asyncio.to_thread(path.read_text, encoding=encoding)


async def write_text_async(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write text to a file asynchronously using a thread pool.

    The content is written to a sibling temporary file first and then moved
    into place, so readers never observe a half-written cache file.

    Args:
        path: Path to the file to write.
        content: Text content to write.
        encoding: Text encoding to use.
    """
    await asyncio.to_thread(_write_text_atomic, path, content, encoding)


async def mkdir_async(
    path: Path, parents: bool = False, exist_ok: bool = False
) -> None:
    """Create a directory asynchronously using a thread pool.

    Args:
        path: Path to the directory to create.
        parents: If True, create parent directories as needed.
        exist_ok: If True, don't raise an error if directory exists.
    """
    await asyncio.to_thread(path.mkdir, parents=parents, exist_ok=exist_ok)


def _write_text_atomic(path: Path, content: str, encoding: str) -> None:
    tmp_path = path.with_name(path.name + ".tmp")
    tmp_path.write_text(content, encoding=encoding)
    tmp_path.replace(path)


class FileCache:
    """File-backed cache medium keyed by file name.

    Args:
        base_path: Directory holding the cached files. Created on first write.
    """

    def __init__(self, base_path: Path) -> None:
        self.base_path = base_path

    def path_for(self, key: str) -> Path:
        return cache_key_path(key, self.base_path)

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def age_of(self, key: str) -> float:
        """Age of the cached entry in seconds."""
        return cache_age_seconds(self.path_for(key))

    def modified_at(self, key: str) -> datetime:
        return modified_at(self.path_for(key))

    async def read(self, key: str) -> str:
        return await read_text_async(self.path_for(key))

    async def write(self, key: str, content: str) -> None:
        await mkdir_async(self.base_path, parents=True, exist_ok=True)
        await write_text_async(self.path_for(key), content)
