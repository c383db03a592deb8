"""Runs a query against every selected space and aggregates the results."""
from __future__ import annotations

import logging
from typing import Sequence

from application.services.cancellation import CancellationToken
from domain.entities import ResultRecord, SpaceHandle
from domain.errors import BackendUnavailableError
from domain.interfaces import BlockRepository

logger = logging.getLogger(__name__)


def resolve_spaces(
    spaces: Sequence[SpaceHandle],
    *,
    all_spaces: bool,
    primary_space_id: str | None,
) -> list[SpaceHandle]:
    """Pick the spaces to search.

    A primary space that is not configured widens the search to every space
    instead of failing.
    """

    if all_spaces or not primary_space_id:
        return list(spaces)
    for space in spaces:
        if space.space_id == primary_space_id:
            return [space]
    logger.info("Primary space %s not found, searching all spaces", primary_space_id)
    return list(spaces)


class SpaceSearchExecutor:
    """Queries spaces in order, degrading to a substring scan where full-text is missing."""

    def __init__(
        self,
        repositories: Sequence[BlockRepository],
        *,
        fetch_limit: int,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        self._repositories = list(repositories)
        self._fetch_limit = fetch_limit
        self._cancel_token = cancel_token

    def execute(self, expression: str, terms: Sequence[str]) -> list[ResultRecord]:
        """Return deduplicated records from all spaces in retrieval order.

        Stops querying further spaces once ``fetch_limit`` records are buffered.
        """

        if not terms:
            logger.info("No search terms, listing documents")

        aggregated: list[ResultRecord] = []
        seen: set[tuple[str, str]] = set()
        for repository in self._repositories:
            if len(aggregated) >= self._fetch_limit:
                logger.debug("Buffered %d results, skipping remaining spaces", len(aggregated))
                break
            if self._cancel_token is not None:
                self._cancel_token.raise_if_cancelled()

            logger.info("Searching %s, limit %d", repository.space_id, self._fetch_limit)
            for record in self._search_space(repository, expression, terms):
                if record.key in seen:
                    continue
                seen.add(record.key)
                aggregated.append(record)
        return aggregated

    def _search_space(
        self, repository: BlockRepository, expression: str, terms: Sequence[str]
    ) -> list[ResultRecord]:
        try:
            return repository.search_fulltext(expression, self._fetch_limit)
        except BackendUnavailableError as exc:
            logger.warning("Full-text search unavailable in %s (%s), using LIKE scan", repository.space_id, exc.cause)
        return repository.search_substring(terms, self._fetch_limit)


__all__ = ["SpaceSearchExecutor", "resolve_spaces"]
