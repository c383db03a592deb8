"""Streamlit page for trying block search against local index files."""
from __future__ import annotations

from pathlib import Path

import streamlit as st

from application.use_cases.search import search
from domain.errors import BlockSearchError
from infrastructure.config import build_default_container
from infrastructure.storage.space_session import SpaceSession, SpaceSource
from ui.logging_utils import setup_logging

setup_logging()
container = build_default_container()
st.set_page_config(page_title="BlockSearch Demo")
st.title("BlockSearch Demo")

st.header("Indexes")
raw_indexes = st.text_area(
    "One SPACE_ID=PATH per line; the first is the primary space",
    value="",
)
sources = []
for line in raw_indexes.splitlines():
    space_id, sep, path = line.strip().partition("=")
    if sep and space_id and path:
        sources.append(SpaceSource(space_id=space_id, path=Path(path)))

st.header("Search")
query = st.text_input("Terms", value="")
all_spaces = st.checkbox("All spaces")
daily = st.checkbox("Include daily notes")
if st.button("Search"):
    try:
        with SpaceSession.open(sources) as session:
            records = search(
                query.split(),
                spaces=session.spaces,
                query_builder=container.query_builder,
                reranker=container.reranker,
                repository_factory=container.repository_factory,
                all_spaces=all_spaces,
                daily=daily,
                primary_space_id=None if all_spaces or not sources else sources[0].space_id,
                result_limit=container.config.result_limit,
                fetch_limit=container.config.fetch_limit,
            )
    except BlockSearchError as exc:
        st.error(f"{exc.title}: {exc}")
    else:
        if not records:
            st.info("No results")
        for record in records:
            st.write(
                {
                    "space_id": record.space_id,
                    "id": record.id,
                    "content": record.content,
                    "document": record.document_name,
                }
            )
