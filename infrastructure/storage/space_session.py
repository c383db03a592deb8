"""Открытые соединения с индексами пространств на время одного запуска."""
from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from domain.entities import SpaceHandle
from domain.errors import ConfigurationError, QueryError

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SpaceSource:
    """Location of one space's index file."""

    space_id: str
    path: Path


class SpaceSession:
    """Owns one connection per space and closes all of them exactly once."""

    def __init__(self, spaces: Sequence[SpaceHandle]) -> None:
        if not spaces:
            raise ConfigurationError("no spaces configured")
        self._spaces = tuple(spaces)
        self._closed = False

    @classmethod
    def open(cls, sources: Iterable[SpaceSource]) -> "SpaceSession":
        """Open every index read-only; already opened connections are closed on failure."""

        handles: list[SpaceHandle] = []
        try:
            for source in sources:
                uri = f"{Path(source.path).expanduser().resolve().as_uri()}?mode=ro"
                try:
                    conn = sqlite3.connect(uri, uri=True)
                except sqlite3.Error as exc:
                    raise QueryError("open", source.space_id, exc) from exc
                handles.append(SpaceHandle(space_id=source.space_id, connection=conn))
            return cls(handles)
        except Exception:
            for handle in handles:
                handle.connection.close()
            raise

    @property
    def spaces(self) -> tuple[SpaceHandle, ...]:
        return self._spaces

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True

        first_error: QueryError | None = None
        for space in self._spaces:
            try:
                space.connection.close()
            except sqlite3.Error as exc:
                logger.warning("Closing index of space %s failed: %s", space.space_id, exc)
                if first_error is None:
                    first_error = QueryError("close", space.space_id, exc)
        if first_error is not None:
            raise first_error

    def __enter__(self) -> "SpaceSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except QueryError:
            # the error that ended the block takes precedence
            logger.exception("Closing spaces after a failed search also failed")


__all__ = ["SpaceSession", "SpaceSource"]
