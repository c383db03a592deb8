"""Query builders for the block index full-text and substring paths."""
from __future__ import annotations

from typing import Sequence

from domain.interfaces import QueryBuilder


def quote_term(term: str) -> str:
    """Quote a term as an FTS5 string so it is never parsed as syntax."""

    return '"' + term.replace('"', '""') + '"'


def like_pattern(term: str) -> str:
    """Return a LIKE pattern matching ``term`` anywhere, with wildcards escaped.

    Use together with ``ESCAPE '\\'``.
    """

    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class Fts5QueryBuilder(QueryBuilder):
    """Builds an FTS5 MATCH expression that ORs several phrasings of the terms.

    The index has no relevance model beyond literal and prefix matching, so the
    expression combines an exact phrase, a prefix-expanded phrase and, for
    several terms, a conjunction of all terms anywhere. Results are re-ranked
    afterwards.
    """

    def build(self, terms: Sequence[str]) -> str:
        words = [term.strip() for term in terms if term and term.strip()]
        if not words:
            return ""

        phrase = quote_term(" ".join(words))
        if len(words) == 1:
            return f"{phrase} OR {phrase}*"

        prefixed = " + ".join(f"{quote_term(word)}*" for word in words)
        conjunction = " AND ".join(f"{quote_term(word)}*" for word in words)
        return f"({phrase}) OR ({prefixed}) OR ({conjunction})"


__all__ = ["Fts5QueryBuilder", "quote_term", "like_pattern"]
