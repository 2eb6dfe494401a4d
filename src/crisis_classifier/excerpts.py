"""Pick the body sentences that carry the most matched keywords."""

from __future__ import annotations

import re
from typing import List, Sequence

_SENTENCE_BREAK = re.compile(r"[.!?]+")


def split_sentences(text: str, min_chars: int = 30) -> List[str]:
    sentences = (s.strip() for s in _SENTENCE_BREAK.split(text))
    return [s for s in sentences if len(s) > min_chars]


def extract_excerpts(
    text: str,
    keywords: Sequence[str],
    max_excerpts: int = 3,
    *,
    min_chars: int = 30,
) -> List[str]:
    """Return up to *max_excerpts* sentences, most keyword hits first.

    Sentences without any hit are dropped even when fewer than
    *max_excerpts* remain.  Equal counts keep their order in the text.
    """
    if max_excerpts <= 0 or not text:
        return []
    needles = [k.casefold() for k in keywords if k.strip()]
    scored = []
    for sentence in split_sentences(text, min_chars):
        lowered = sentence.casefold()
        count = sum(1 for k in needles if k in lowered)
        if count:
            scored.append((count, sentence))
    # sort() is stable, so ties stay in document order.
    scored.sort(key=lambda item: item[0], reverse=True)
    return [sentence for _, sentence in scored[:max_excerpts]]
