"""Indicator scorer: one pattern against one content string."""

from __future__ import annotations

import logging

from .config import ScoringWeights
from .geography import detect_geography
from .models import AnalysisResult, SemanticPattern
from .root_cause import determine_root_cause
from .taxonomy import matches_word, matching_phrases

_log = logging.getLogger(__name__)


def build_content(url: str, title: str | None = None, body_text: str | None = None) -> str:
    return f"{url} {title or ''} {body_text or ''}"


def analyze_pattern(
    content: str,
    pattern: SemanticPattern,
    weights: ScoringWeights | None = None,
) -> AnalysisResult:
    """Score *pattern* against *content*.

    Negative indicators are matched as whole words against the raw text and
    only subtract points.  Every other tier is a case-insensitive substring
    match.  A pattern with no core hit, or a single core hit without enough
    corroboration, yields the zero-score result.
    """
    w = weights or ScoringWeights()
    haystack = content.casefold()

    negatives = [n for n in pattern.negative_indicators if matches_word(content, n)]
    negative_penalty = len(negatives) * w.negative_penalty

    core_hits = matching_phrases(haystack, pattern.core_indicators)
    if not core_hits:
        return AnalysisResult.empty(pattern.cause)

    context_hits = matching_phrases(haystack, pattern.supporting_context)
    action_hits = matching_phrases(haystack, pattern.action_indicators)

    core_score = len(core_hits) * w.core_weight
    context_score = len(context_hits) * w.context_weight
    action_score = len(action_hits) * w.action_weight
    raw_score = core_score + context_score + action_score
    final_score = max(0.0, raw_score - negative_penalty)

    if len(core_hits) == 1 and final_score < w.single_core_floor:
        _log.debug(
            "%s: single core hit %r below floor (%.1f < %.1f)",
            pattern.cause, core_hits[0], final_score, w.single_core_floor,
        )
        return AnalysisResult.empty(pattern.cause)

    geo = detect_geography(content, pattern.geo_keywords)
    geo_score = geo.match_count * w.geo_weight

    return AnalysisResult(
        cause=pattern.cause,
        score=final_score + geo_score,
        matched_keywords=core_hits + context_hits + action_hits,
        context_score=context_score,
        action_score=action_score,
        negative_score=negative_penalty,
        geo_score=geo_score,
        geo=geo.geo,
        geo_name=geo.geo_name,
        detected_themes=list(core_hits),
        crisis_type=pattern.crisis_type,
        root_cause=determine_root_cause(content, pattern),
    )
