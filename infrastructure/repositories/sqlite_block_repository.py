"""SQLite-репозиторий блоков одного пространства."""
from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence, TypeVar

from application.services.cancellation import CancellationToken
from domain.entities import EntityKind, ResultRecord, SpaceHandle
from domain.errors import BackendUnavailableError, QueryError, SearchCancelledError
from domain.interfaces import BlockRepository
from infrastructure.query.fts_query_builder import like_pattern

logger = logging.getLogger(__name__)

T = TypeVar("T")

Statement = tuple[str, tuple[object, ...]]

_UNAVAILABLE_MARKERS = ("no such module", "no such table")


def is_backend_unavailable(exc: Exception) -> bool:
    """Return True when a backend error means the queried table or module is missing."""

    message = str(exc).lower()
    return any(marker in message for marker in _UNAVAILABLE_MARKERS)


def _unavailable(exc: QueryError) -> bool:
    return exc.stage == "query" and exc.cause is not None and is_backend_unavailable(exc.cause)


@dataclass(slots=True, frozen=True)
class FallbackTable:
    """A plain table holding the block index rows and its column names."""

    name: str
    id_column: str
    content_column: str
    entity_type_column: str
    document_id_column: str


class SqliteBlockRepository(BlockRepository):
    """Выполняет запросы к поисковому индексу пространства."""

    def __init__(
        self,
        space: SpaceHandle,
        *,
        fulltext_table: str,
        fallback_tables: Sequence[FallbackTable],
        cancel_token: CancellationToken | None = None,
        progress_interval: int = 1000,
    ) -> None:
        self.space_id = space.space_id
        self._conn = space.connection
        self._fulltext_table = fulltext_table
        self._fallback_tables = tuple(fallback_tables)
        self._cancel_token = cancel_token
        self._progress_interval = progress_interval

    def search_fulltext(self, expression: str, limit: int) -> list[ResultRecord]:
        if expression:
            query = f"""
                SELECT id, content, entityType, documentId
                FROM {self._fulltext_table}(?)
                ORDER BY rank + customRank
                LIMIT ?
            """
            params: tuple[object, ...] = (expression, limit)
        else:
            query = f"""
                SELECT id, content, entityType, documentId
                FROM {self._fulltext_table}
                ORDER BY customRank
                LIMIT ?
            """
            params = (limit,)

        logger.debug("Full-text query on %s: %s, args: %s", self.space_id, query, params)
        try:
            return self._fetch_records(query, params)
        except QueryError as exc:
            if _unavailable(exc):
                raise BackendUnavailableError(self.space_id, exc.cause) from exc.cause
            raise

    def search_substring(self, terms: Sequence[str], limit: int) -> list[ResultRecord]:
        statements = [
            (table.name, self._substring_query(table, terms, limit)) for table in self._fallback_tables
        ]
        return self._first_available(statements, self._fetch_records)

    def document_titles(self, document_ids: Iterable[str]) -> dict[str, str]:
        ids = list(dict.fromkeys(doc_id for doc_id in document_ids if doc_id))
        if not ids:
            return {}

        placeholders = ", ".join("?" for _ in ids)
        params: tuple[object, ...] = (EntityKind.DOCUMENT, *ids)
        statements: list[tuple[str, Statement]] = [
            (
                self._fulltext_table,
                (
                    f"SELECT documentId, content FROM {self._fulltext_table} "
                    f"WHERE entityType = ? AND documentId IN ({placeholders})",
                    params,
                ),
            )
        ]
        for table in self._fallback_tables:
            query = (
                f"SELECT {table.document_id_column}, {table.content_column} FROM {table.name} "
                f"WHERE {table.entity_type_column} = ? AND {table.document_id_column} IN ({placeholders})"
            )
            statements.append((table.name, (query, params)))

        return dict(self._first_available(statements, self._fetch_pairs))

    @staticmethod
    def _substring_query(table: FallbackTable, terms: Sequence[str], limit: int) -> Statement:
        columns = (
            f"{table.id_column} AS id, {table.content_column} AS content, "
            f"{table.entity_type_column} AS entityType, {table.document_id_column} AS documentId"
        )
        if not terms:
            query = f"""
                SELECT {columns}
                FROM {table.name}
                WHERE {table.entity_type_column} = ?
                ORDER BY {table.id_column} DESC
                LIMIT ?
            """
            return query, (EntityKind.DOCUMENT, limit)

        conditions = " AND ".join(f"{table.content_column} LIKE ? ESCAPE '\\'" for _ in terms)
        query = f"""
            SELECT {columns}
            FROM {table.name}
            WHERE {conditions}
            LIMIT ?
        """
        return query, (*(like_pattern(term) for term in terms), limit)

    def _first_available(
        self,
        statements: Sequence[tuple[str, Statement]],
        fetch: Callable[[str, tuple[object, ...]], T],
    ) -> T:
        """Run each statement in turn until one finds its table."""

        last_error: QueryError | None = None
        for table_name, (query, params) in statements:
            logger.debug("Trying query on %s: %s, args: %s", table_name, query, params)
            try:
                return fetch(query, params)
            except QueryError as exc:
                if not _unavailable(exc):
                    raise
                logger.info("Query on %s failed: %s", table_name, exc.cause)
                last_error = exc

        if last_error is None:
            raise QueryError("query", self.space_id, RuntimeError("no fallback tables configured"))
        raise last_error

    def _fetch_records(self, query: str, params: tuple[object, ...]) -> list[ResultRecord]:
        records: list[ResultRecord] = []
        for row in self._rows(query, params):
            try:
                block_id, content, entity_type, document_id = row
            except (TypeError, ValueError) as exc:
                raise QueryError("scan row", self.space_id, exc) from exc
            if block_id is None or entity_type is None:
                raise QueryError("scan row", self.space_id, ValueError(f"incomplete row: {row!r}"))
            is_document = entity_type == EntityKind.DOCUMENT
            records.append(
                ResultRecord(
                    id=str(block_id),
                    space_id=self.space_id,
                    content=content or "",
                    entity_type=str(entity_type),
                    document_id="" if is_document else str(document_id or ""),
                )
            )
        return records

    def _fetch_pairs(self, query: str, params: tuple[object, ...]) -> list[tuple[str, str]]:
        pairs: list[tuple[str, str]] = []
        for row in self._rows(query, params):
            try:
                document_id, content = row
            except (TypeError, ValueError) as exc:
                raise QueryError("scan row", self.space_id, exc) from exc
            pairs.append((str(document_id), content or ""))
        return pairs

    def _rows(self, query: str, params: tuple[object, ...]) -> list[tuple]:
        """Run ``query`` with a progress handler that interrupts it on cancellation."""

        token = self._cancel_token
        if token is not None:
            token.raise_if_cancelled()
            self._conn.set_progress_handler(lambda: 1 if token.cancelled else 0, self._progress_interval)
        try:
            try:
                cursor = self._conn.execute(query, params)
            except sqlite3.Error as exc:
                self._raise_if_cancelled(exc)
                raise QueryError("query", self.space_id, exc) from exc

            rows: list[tuple] = []
            try:
                for row in cursor:
                    rows.append(row)
                    if token is not None:
                        token.raise_if_cancelled()
            except sqlite3.Error as exc:
                self._raise_if_cancelled(exc)
                raise QueryError("row iteration", self.space_id, exc) from exc

            try:
                cursor.close()
            except sqlite3.Error as exc:
                raise QueryError("close rows", self.space_id, exc) from exc
            return rows
        finally:
            if token is not None:
                self._conn.set_progress_handler(None, 0)

    def _raise_if_cancelled(self, exc: sqlite3.Error) -> None:
        if self._cancel_token is not None and self._cancel_token.cancelled:
            raise SearchCancelledError("search was cancelled") from exc


__all__ = ["SqliteBlockRepository", "FallbackTable", "is_backend_unavailable"]
