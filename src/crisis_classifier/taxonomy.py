"""Text normalization and keyword matching helpers shared by the engine."""

from __future__ import annotations

import re
from typing import Iterable, Iterator


def normalize_text(value: str) -> str:
    return " ".join(value.casefold().split())


def word_pattern(term: str) -> re.Pattern[str]:
    # Word-boundary match: "ice" must not fire inside "police" or "price".
    return re.compile(r"(?<!\w)" + re.escape(term.casefold()) + r"(?!\w)", re.IGNORECASE)


def matches_word(text: str, term: str) -> bool:
    """Whole-word, case-insensitive match of *term* against raw *text*."""
    if not term.strip():
        return False
    return word_pattern(term).search(text) is not None


def iter_word_matches(text: str, term: str) -> Iterator[re.Match[str]]:
    if not term.strip():
        return iter(())
    return word_pattern(term).finditer(text)


def contains_phrase(haystack: str, phrase: str) -> bool:
    """Plain substring test; *haystack* is expected to be case-folded already."""
    needle = phrase.casefold()
    return bool(needle) and needle in haystack


def matching_phrases(haystack: str, phrases: Iterable[str]) -> list[str]:
    """Return the phrases found in *haystack*, verbatim and in declaration order."""
    return [p for p in phrases if contains_phrase(haystack, p)]


def first_matching(haystack: str, phrases: Iterable[str]) -> str | None:
    for phrase in phrases:
        if contains_phrase(haystack, phrase):
            return phrase
    return None
