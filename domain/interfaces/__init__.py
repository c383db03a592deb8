"""Abstract interfaces for the BlockSearch system."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

from domain.entities import ResultRecord


class QueryBuilder(ABC):
    """Turns user search terms into a backend query expression."""

    @abstractmethod
    def build(self, terms: Sequence[str]) -> str:
        """Return the query expression, or an empty string when there are no terms."""


class BlockRepository(ABC):
    """Runs queries against the block index of a single space."""

    space_id: str

    @abstractmethod
    def search_fulltext(self, expression: str, limit: int) -> list[ResultRecord]:
        """Run a full-text query; an empty expression lists blocks by rank.

        Raises ``BackendUnavailableError`` when full-text support is missing.
        """

    @abstractmethod
    def search_substring(self, terms: Sequence[str], limit: int) -> list[ResultRecord]:
        """Scan for blocks containing every term; no terms lists recent documents."""

    @abstractmethod
    def document_titles(self, document_ids: Iterable[str]) -> dict[str, str]:
        """Return the title of each document id found in the space."""


class Reranker(ABC):
    """Scores aggregated results against the search terms and orders them."""

    @abstractmethod
    def rerank(self, terms: Sequence[str], results: Iterable[ResultRecord]) -> list[ResultRecord]:
        """Return the eligible results in ranked order."""


__all__ = [
    "QueryBuilder",
    "BlockRepository",
    "Reranker",
]
