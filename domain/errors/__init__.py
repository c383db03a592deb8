"""Errors raised while searching block indexes."""
from __future__ import annotations


class BlockSearchError(Exception):
    """Base error carrying a short title for presentation."""

    title = "Search failed"


class ConfigurationError(BlockSearchError):
    """No spaces are configured, so a search cannot start."""

    title = "Initialization failed"


class BackendUnavailableError(BlockSearchError):
    """The index backend lacks full-text support.

    Raised by repositories and recovered by the executor, which retries with
    a substring scan.
    """

    title = "Full-text search unavailable"

    def __init__(self, space_id: str, cause: Exception) -> None:
        self.space_id = space_id
        self.cause = cause
        super().__init__(f"full-text search unavailable in space {space_id}: {cause}")


class QueryError(BlockSearchError):
    """A backend failure at a named stage of running a query."""

    title = "Failed to query the database"

    def __init__(self, stage: str, space_id: str, cause: Exception | None = None) -> None:
        self.stage = stage
        self.space_id = space_id
        self.cause = cause
        message = f"{stage} failed in space {space_id}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SearchCancelledError(BlockSearchError):
    """The caller cancelled the search before it completed."""

    title = "Search cancelled"


__all__ = [
    "BlockSearchError",
    "ConfigurationError",
    "BackendUnavailableError",
    "QueryError",
    "SearchCancelledError",
]
