"""Filtering, capping and title backfill applied to ranked results."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Sequence

from application.services.text_matching import is_date_title
from domain.entities import ResultRecord
from domain.interfaces import BlockRepository

logger = logging.getLogger(__name__)

DOCUMENT_LABEL = "[Document]"
BLOCK_LABEL_PREFIX = "[Block] "


def filter_date_titles(records: Iterable[ResultRecord], *, daily: bool, limit: int) -> list[ResultRecord]:
    """Drop daily-note documents unless ``daily`` is set, keeping at most ``limit`` records.

    Only documents are checked; blocks whose text looks like a date stay.
    """

    filtered: list[ResultRecord] = []
    for record in records:
        if len(filtered) >= limit:
            break
        if not daily and record.is_document and is_date_title(record.content):
            continue
        filtered.append(record)
    return filtered


def backfill_document_names(
    records: Sequence[ResultRecord],
    repositories: Sequence[BlockRepository],
) -> list[ResultRecord]:
    """Return copies of ``records`` labelled with their parent document title.

    Titles are fetched with one query per space. A block whose document is not
    found gets an empty title; records already labelled are left as they are.
    """

    if not records:
        return []

    wanted: dict[str, list[str]] = {}
    for record in records:
        if record.is_document or record.document_name is not None:
            continue
        wanted.setdefault(record.space_id, []).append(record.document_id)

    titles: dict[tuple[str, str], str] = {}
    for repository in repositories:
        document_ids = wanted.get(repository.space_id)
        if not document_ids:
            continue
        found = repository.document_titles(document_ids)
        logger.debug("Resolved %d of %d document titles in %s", len(found), len(set(document_ids)), repository.space_id)
        for document_id, title in found.items():
            titles[(repository.space_id, document_id)] = title

    backfilled: list[ResultRecord] = []
    for record in records:
        if record.document_name is not None:
            backfilled.append(record)
        elif record.is_document:
            backfilled.append(replace(record, document_name=DOCUMENT_LABEL))
        else:
            title = titles.get((record.space_id, record.document_id), "")
            backfilled.append(replace(record, document_name=BLOCK_LABEL_PREFIX + title))
    return backfilled


__all__ = [
    "filter_date_titles",
    "backfill_document_names",
    "DOCUMENT_LABEL",
    "BLOCK_LABEL_PREFIX",
]
