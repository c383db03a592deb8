"""Domain entities for the BlockSearch system."""
from __future__ import annotations

import sqlite3
from dataclasses import dataclass


class EntityKind:
    """Entity types stored in the block index."""

    DOCUMENT = "document"
    FRAGMENT = "block"


@dataclass(slots=True)
class SpaceHandle:
    """An independently indexed space and the open connection to its index."""

    space_id: str
    connection: sqlite3.Connection


@dataclass(slots=True, frozen=True)
class ResultRecord:
    """A matched document or block inside one space."""

    id: str
    space_id: str
    content: str
    entity_type: str
    document_id: str = ""
    document_name: str | None = None

    @property
    def is_document(self) -> bool:
        return self.entity_type == EntityKind.DOCUMENT

    @property
    def key(self) -> tuple[str, str]:
        return (self.space_id, self.id)


@dataclass(slots=True)
class MatchScore:
    """Match quality of a record against the search words, used only while sorting."""

    record: ResultRecord
    exact_match: bool
    ordered_words_match: bool
    all_words_match: bool
    original_index: int

    @property
    def is_document(self) -> bool:
        return self.record.is_document


__all__ = [
    "EntityKind",
    "SpaceHandle",
    "ResultRecord",
    "MatchScore",
]
