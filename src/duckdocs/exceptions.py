"""Custom exceptions for duckdocs."""


class DuckDocsError(Exception):
    """Base exception for duckdocs operations."""


class FetchError(DuckDocsError):
    """Error while fetching the documentation source."""


class InvalidSourceLocationError(FetchError):
    """The documentation source location is not a usable URL."""


class UndecodableContentError(FetchError):
    """Fetched documentation could not be decoded as UTF-8 text."""


class SectionNotFoundError(DuckDocsError):
    """No documentation section matched the lookup."""
