"""Turns search results into launcher items with deep links into the notes app."""
from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import quote

from domain.entities import ResultRecord
from domain.errors import BlockSearchError

NO_RESULTS_TITLE = "No results"


def open_block_url(record: ResultRecord) -> str:
    return f"craftdocs://open?blockId={record.id}&spaceId={record.space_id}"


def create_document_url(space_id: str, title: str) -> str:
    return (
        f"craftdocs://createdocument?spaceId={space_id}"
        f"&title={quote(title, safe='')}&content=&folderId="
    )


def create_document_item(terms: Sequence[str], space_id: str) -> dict[str, Any]:
    name = " ".join(terms)
    title = f'Create "{name}"'
    return {
        "uid": title,
        "title": title,
        "arg": create_document_url(space_id, name),
        "valid": True,
    }


def present_results(
    records: Sequence[ResultRecord],
    terms: Sequence[str],
    *,
    create_space_id: str | None,
) -> list[dict[str, Any]]:
    """Build launcher items with documents ahead of blocks.

    The order within documents and within blocks is kept. A "create document"
    item goes between the two groups, or stands alone when nothing matched.
    Without a space to create in, an empty result gives a plain "No results" item.
    """

    ordered = sorted(records, key=lambda record: not record.is_document)

    items: list[dict[str, Any]] = []
    create_added = False
    for record in ordered:
        if not create_added and not record.is_document and create_space_id is not None:
            items.append(create_document_item(terms, create_space_id))
            create_added = True
        items.append(
            {
                "uid": record.id,
                "title": record.content,
                "subtitle": record.document_name or "",
                "arg": open_block_url(record),
                "valid": True,
            }
        )

    if not records:
        if create_space_id is not None:
            items.append(create_document_item(terms, create_space_id))
        else:
            items.append({"title": NO_RESULTS_TITLE, "valid": False})
    return items


def present_error(error: Exception) -> dict[str, Any]:
    title = error.title if isinstance(error, BlockSearchError) else "Unknown error"
    return {"title": title, "subtitle": str(error), "valid": False}


__all__ = [
    "present_results",
    "present_error",
    "create_document_item",
    "open_block_url",
    "create_document_url",
    "NO_RESULTS_TITLE",
]
