"""Use case that searches blocks across the configured spaces."""
from __future__ import annotations

import logging
from typing import Callable, Sequence

from application.services.cancellation import CancellationToken
from application.services.result_post_processor import backfill_document_names, filter_date_titles
from application.services.space_search import SpaceSearchExecutor, resolve_spaces
from domain.entities import ResultRecord, SpaceHandle
from domain.errors import ConfigurationError
from domain.interfaces import BlockRepository, QueryBuilder, Reranker

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[SpaceHandle, CancellationToken | None], BlockRepository]


def search(
    terms: Sequence[str],
    *,
    spaces: Sequence[SpaceHandle],
    query_builder: QueryBuilder,
    reranker: Reranker,
    repository_factory: RepositoryFactory,
    all_spaces: bool = False,
    daily: bool = False,
    primary_space_id: str | None = None,
    result_limit: int = 40,
    fetch_limit: int = 200,
    backfill: bool = True,
    cancel_token: CancellationToken | None = None,
) -> list[ResultRecord]:
    """Search blocks matching ``terms``; no terms lists documents instead.

    An empty list means nothing matched. Any backend failure other than missing
    full-text support raises, discarding results gathered from earlier spaces.
    """

    if not spaces:
        raise ConfigurationError("no spaces configured")

    terms = [term.strip() for term in terms if term and term.strip()]
    logger.info("Searching with terms: %s (all_spaces=%s, daily=%s)", terms, all_spaces, daily)

    selected = resolve_spaces(spaces, all_spaces=all_spaces, primary_space_id=primary_space_id)
    repositories = [repository_factory(space, cancel_token) for space in selected]

    expression = query_builder.build(terms)
    executor = SpaceSearchExecutor(repositories, fetch_limit=fetch_limit, cancel_token=cancel_token)
    aggregated = executor.execute(expression, terms)

    ranked = reranker.rerank(terms, aggregated) if terms else aggregated
    results = filter_date_titles(ranked, daily=daily, limit=result_limit)
    logger.info("Found %d results (%d before filtering)", len(results), len(aggregated))

    if backfill and results:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        results = backfill_document_names(results, repositories)
    return results


__all__ = ["search", "RepositoryFactory"]
