"""FastAPI layer that exposes block search over the configured spaces."""
from __future__ import annotations

import logging
from typing import Sequence

from fastapi import FastAPI, HTTPException, Query as FastAPIQuery
from pydantic import BaseModel

from application.use_cases.search import search
from domain.entities import ResultRecord
from domain.errors import BlockSearchError, ConfigurationError, SearchCancelledError
from infrastructure.config import ContainerConfig, build_default_container
from infrastructure.storage.space_session import SpaceSession, SpaceSource

logger = logging.getLogger(__name__)


class ResultPayload(BaseModel):
    id: str
    space_id: str
    content: str
    entity_type: str
    document_id: str
    document_name: str | None = None


class SearchResponse(BaseModel):
    query: str
    no_results: bool
    results: list[ResultPayload]


def _to_payload(record: ResultRecord) -> ResultPayload:
    return ResultPayload(
        id=record.id,
        space_id=record.space_id,
        content=record.content,
        entity_type=record.entity_type,
        document_id=record.document_id,
        document_name=record.document_name,
    )


def create_app(sources: Sequence[SpaceSource], config: ContainerConfig | None = None) -> FastAPI:
    """Build the API; each request opens the indexes and closes them when done."""

    app = FastAPI(title="BlockSearch API")
    container = build_default_container(config)
    space_sources = list(sources)

    @app.get("/search", response_model=SearchResponse)
    def search_endpoint(
        q: str = FastAPIQuery("", description="Space separated search terms"),
        all_spaces: bool = False,
        daily: bool = False,
        primary_space: str | None = None,
    ) -> SearchResponse:
        terms = q.split()
        try:
            with SpaceSession.open(space_sources) as session:
                records = search(
                    terms,
                    spaces=session.spaces,
                    query_builder=container.query_builder,
                    reranker=container.reranker,
                    repository_factory=container.repository_factory,
                    all_spaces=all_spaces,
                    daily=daily,
                    primary_space_id=primary_space,
                    result_limit=container.config.result_limit,
                    fetch_limit=container.config.fetch_limit,
                )
        except (ConfigurationError, SearchCancelledError) as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        except BlockSearchError as exc:
            logger.error("Search for %r failed: %s", q, exc)
            raise HTTPException(status_code=500, detail=f"{exc.title}: {exc}") from exc

        return SearchResponse(
            query=q,
            no_results=not records,
            results=[_to_payload(record) for record in records],
        )

    return app
