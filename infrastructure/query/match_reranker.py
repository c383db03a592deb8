"""Reranker that orders results by how closely their text matches the search."""
from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, Sequence

from application.services.text_matching import contains_all_words, contains_ordered_words
from domain.entities import MatchScore, ResultRecord
from domain.interfaces import Reranker


def score_record(record: ResultRecord, phrase: str, words: Sequence[str], index: int) -> MatchScore:
    """Classify ``record`` against the lower-cased search phrase and words."""

    content = record.content.lower()
    exact = phrase in content
    if len(words) > 1:
        ordered = contains_ordered_words(content, words)
        all_words = contains_all_words(content, words)
    else:
        ordered = exact
        all_words = exact
    return MatchScore(
        record=record,
        exact_match=exact,
        ordered_words_match=ordered,
        all_words_match=all_words,
        original_index=index,
    )


def compare_scores(left: MatchScore, right: MatchScore) -> int:
    """Order by match tier, documents first within a tier, then retrieval order."""

    if left.exact_match != right.exact_match:
        return -1 if left.exact_match else 1
    if left.exact_match and left.is_document != right.is_document:
        return -1 if left.is_document else 1

    if left.ordered_words_match != right.ordered_words_match:
        return -1 if left.ordered_words_match else 1
    if left.ordered_words_match and left.is_document != right.is_document:
        return -1 if left.is_document else 1

    if left.all_words_match != right.all_words_match:
        return -1 if left.all_words_match else 1
    if left.all_words_match and left.is_document != right.is_document:
        return -1 if left.is_document else 1

    if left.is_document != right.is_document:
        return -1 if left.is_document else 1

    return left.original_index - right.original_index


class MatchQualityReranker(Reranker):
    """Drops results missing a search word and sorts the rest by match quality."""

    def rerank(self, terms: Sequence[str], results: Iterable[ResultRecord]) -> list[ResultRecord]:
        words = [term.lower() for term in terms]
        phrase = " ".join(words)

        scores = [score_record(record, phrase, words, index) for index, record in enumerate(results)]
        if len(words) > 1:
            scores = [score for score in scores if score.all_words_match]

        scores.sort(key=cmp_to_key(compare_scores))
        return [score.record for score in scores]


__all__ = ["MatchQualityReranker", "score_record", "compare_scores"]
