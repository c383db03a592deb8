"""Dependency wiring for the BlockSearch application."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Literal

from application.services.cancellation import CancellationToken
from application.use_cases.search import RepositoryFactory
from domain.entities import SpaceHandle
from domain.interfaces import BlockRepository, QueryBuilder, Reranker
from infrastructure.query.fts_query_builder import Fts5QueryBuilder
from infrastructure.query.match_reranker import MatchQualityReranker
from infrastructure.repositories.sqlite_block_repository import FallbackTable, SqliteBlockRepository

RerankerName = Literal["match_quality"]


DEFAULT_FALLBACK_TABLES: tuple[FallbackTable, ...] = (
    # FTS5 shadow table; readable without the fts5 module
    FallbackTable(
        name="BlockSearch_content",
        id_column="c0",
        content_column="c1",
        entity_type_column="c3",
        document_id_column="c7",
    ),
    FallbackTable(
        name="BlockSearch",
        id_column="id",
        content_column="content",
        entity_type_column="entityType",
        document_id_column="documentId",
    ),
)


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    config: "ContainerConfig"
    query_builder: QueryBuilder
    reranker: Reranker
    repository_factory: RepositoryFactory


@dataclass(slots=True)
class ContainerConfig:
    """Search limits and the index schema the repositories query."""

    result_limit: int = 40
    fetch_limit: int = 200
    fulltext_table: str = "BlockSearch"
    fallback_tables: tuple[FallbackTable, ...] = field(default=DEFAULT_FALLBACK_TABLES)
    progress_interval: int = 1000
    reranker: RerankerName = "match_quality"


_RERANKER_FACTORIES: dict[RerankerName, Callable[[], Reranker]] = {
    "match_quality": MatchQualityReranker,
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig()
    if cfg.fetch_limit < cfg.result_limit:
        raise ValueError("fetch_limit must not be smaller than result_limit")
    try:
        reranker = _RERANKER_FACTORIES[cfg.reranker]()
    except KeyError as exc:  # pragma: no cover
        raise ValueError(f"Unknown reranker '{cfg.reranker}'") from exc

    def repository_factory(space: SpaceHandle, cancel_token: CancellationToken | None) -> BlockRepository:
        return SqliteBlockRepository(
            space,
            fulltext_table=cfg.fulltext_table,
            fallback_tables=cfg.fallback_tables,
            cancel_token=cancel_token,
            progress_interval=cfg.progress_interval,
        )

    return Container(
        config=cfg,
        query_builder=Fts5QueryBuilder(),
        reranker=reranker,
        repository_factory=repository_factory,
    )


__all__ = ["Container", "ContainerConfig", "DEFAULT_FALLBACK_TABLES", "build_default_container"]
