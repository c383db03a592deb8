"""Pure text checks used for ranking and filtering."""
from __future__ import annotations

from typing import Sequence


def is_date_title(text: str) -> bool:
    """Return True when ``text`` is exactly a ``YYYY.MM.DD`` date."""

    if len(text) != 10:
        return False
    return (
        text[4] == "."
        and text[7] == "."
        and _is_digits(text[0:4])
        and _is_digits(text[5:7])
        and _is_digits(text[8:10])
    )


def _is_digits(text: str) -> bool:
    # str.isdigit accepts non-ASCII digits
    return all("0" <= char <= "9" for char in text)


def contains_ordered_words(haystack: str, words: Sequence[str]) -> bool:
    """Return True when every word occurs in ``haystack`` in the given order.

    Words need not be adjacent but may not overlap each other.
    """

    cursor = 0
    for word in words:
        position = haystack.find(word, cursor)
        if position == -1:
            return False
        cursor = position + len(word)
    return True


def contains_all_words(haystack: str, words: Sequence[str]) -> bool:
    """Return True when ``haystack`` contains every word, in any order."""

    return all(word in haystack for word in words)


__all__ = ["is_date_title", "contains_ordered_words", "contains_all_words"]
