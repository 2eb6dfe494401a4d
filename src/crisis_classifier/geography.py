"""Context-aware geographic disambiguation.

A location keyword counts as evidence only when the surrounding text treats
the place as the subject of the story.  "Floods in Nepal" makes Nepal the
subject; "larger than Chile" merely mentions Chile.  Each whole-word hit is
scored from a fixed window of text on either side of it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Mapping

from .models import GeoMatch
from .taxonomy import iter_word_matches

_log = logging.getLogger(__name__)

CONTEXT_WINDOW = 100
HEADLINE_CHARS = 100
RECURRENCE_MIN_HITS = 3

BROAD_REGIONS = frozenset({"Global", "Asia", "Africa", "Europe", "Americas"})

# ── Cue patterns ─────────────────────────────────────────────────────
# ``before`` ends right where the keyword starts; ``after`` begins with
# the keyword itself.

_SUBJECT_BEFORE = re.compile(r"\bin\s+(?:\w+\s+)?$", re.IGNORECASE)
_SUBJECT_AFTER_VERB = re.compile(
    r"^[^,]{0,20}\s+(?:is|are|has|have|faces|facing|experiencing|suffers?|hit|struck|affected)\b",
    re.IGNORECASE,
)
_FIRST_CLAUSE = re.compile(r"^[^,]{0,30}$")
_SENTENCE_SPLIT = re.compile(r"[.!?]")

_WEAK_SUBJECT_BEFORE = re.compile(
    r"\b(?:crisis|disaster|emergency|situation|conflict|war|outbreak|epidemic)\s+in\s+(?:\w+\s+)?$",
    re.IGNORECASE,
)
_WEAK_SUBJECT_AFTER = re.compile(
    r"^[^,]{0,20}\s+(?:residents|people|population|civilians|victims|survivors)\b",
    re.IGNORECASE,
)

_COMPARISON_BEFORE = re.compile(
    r"\b(?:like|similar\s+to|compared\s+to|than|versus|vs\.?|unlike|except)\s+(?:\w+\s+)?$",
    re.IGNORECASE,
)
_RANKING_BEFORE = re.compile(
    r"\b(?:second|third|fourth|largest|biggest|smaller|larger|after|behind)\s+(?:\w+\s+)?$",
    re.IGNORECASE,
)
_RANKING_AFTER = re.compile(
    r"^[^,]{0,20}\s+(?:is|was|has)\s+(?:the\s+)?(?:second|third|largest|biggest|smaller)\b",
    re.IGNORECASE,
)

_ALSO_NEARBY = re.compile(r"\b(?:also|too|as\s+well|similarly|likewise)\b", re.IGNORECASE)
_OTHER_BEFORE = re.compile(r"\b(?:other|another|different)\s+(?:\w+\s+)?$", re.IGNORECASE)


@dataclass(frozen=True)
class LocationContext:
    """Aggregated cue scores for every whole-word hit of one keyword."""

    hits: int = 0
    subject_score: int = 0
    context_score: int = 0

    @property
    def is_subject(self) -> bool:
        return self.subject_score > 0


def analyze_location_context(content: str, keyword: str) -> LocationContext:
    matches = list(iter_word_matches(content, keyword))
    if not matches:
        return LocationContext()

    subject = 0
    context = 0
    recurring = len(matches) >= RECURRENCE_MIN_HITS
    for match in matches:
        start = match.start()
        before = content[max(0, start - CONTEXT_WINDOW):start]
        after = content[start:start + CONTEXT_WINDOW]
        first_segment = _SENTENCE_SPLIT.split(after, maxsplit=1)[0]

        if (
            _SUBJECT_BEFORE.search(before)
            or _SUBJECT_AFTER_VERB.search(after)
            or _FIRST_CLAUSE.match(first_segment)
        ):
            subject += 3
            context += 3

        if _WEAK_SUBJECT_BEFORE.search(before) or _WEAK_SUBJECT_AFTER.search(after):
            subject += 2
            context += 2

        if (
            _COMPARISON_BEFORE.search(before)
            or _RANKING_BEFORE.search(before)
            or _RANKING_AFTER.search(after)
        ):
            subject -= 2
            context -= 1

        if _ALSO_NEARBY.search(before + after) or _OTHER_BEFORE.search(before):
            subject -= 1

        if start < HEADLINE_CHARS:
            subject += 2
            context += 2

        if recurring:
            context += 1

    return LocationContext(hits=len(matches), subject_score=subject, context_score=max(0, context))


def geo_identifier(location: str) -> str:
    return re.sub(r"\s+", "-", location.strip().lower())


def _candidate(location: str, keywords: List[str], content: str) -> GeoMatch | None:
    match_count = 0
    context_score = 0
    is_subject = False
    for keyword in keywords:
        analysis = analyze_location_context(content, keyword)
        if not analysis.hits:
            continue
        match_count += 1
        context_score += analysis.context_score
        is_subject = is_subject or analysis.is_subject
    if not match_count:
        return None
    return GeoMatch(
        geo=geo_identifier(location),
        geo_name=location,
        match_count=match_count,
        context_score=context_score,
        is_subject=is_subject,
    )


def detect_geography(content: str, geo_keywords: Mapping[str, List[str]] | None) -> GeoMatch:
    """Pick the location *content* is about, or the Global placeholder.

    Candidates rank by subject status, then context score, then the number
    of distinct keywords that hit, with broad regions after named places.
    """
    if not geo_keywords or not content.strip():
        return GeoMatch()

    candidates = list(score_by_location(content, geo_keywords).values())
    if not candidates:
        return GeoMatch()

    candidates.sort(
        key=lambda c: (
            not c.is_subject,
            -c.context_score,
            -c.match_count,
            c.geo_name in BROAD_REGIONS,
        )
    )
    best = candidates[0]
    if best.context_score > 0 or best.is_subject:
        return best
    _log.debug("No subject location among %d candidate(s); using Global", len(candidates))
    return GeoMatch()


def score_by_location(content: str, geo_keywords: Mapping[str, List[str]]) -> Dict[str, GeoMatch]:
    """Every candidate location with at least one hit, keyed by display name."""
    found: Dict[str, GeoMatch] = {}
    for location, keywords in geo_keywords.items():
        candidate = _candidate(location, keywords, content)
        if candidate is not None:
            found[location] = candidate
    return found
