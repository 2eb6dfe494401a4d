"""Classification orchestrator.

Runs every registered pattern through the indicator scorer and walks the
acceptance gates:

  scored ── no non-zero result ─────────────► rejected (None)
     │
     ├── best score < pattern.min_score ────► rejected (None)
     │
     ├── confidence < threshold ────────────► rejected (None)
     │
     └── accepted ──► excerpts, needs, severity, affected groups

Rejections are indistinguishable to the caller; the reason is only visible
through the optional trace callback.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from .config import ClassifierConfig, ScoringWeights
from .excerpts import extract_excerpts
from .models import AnalysisResult, Classification, SemanticPattern
from .needs import detect_needs
from .patterns import affected_groups_for, default_patterns, load_patterns_file
from .scoring import analyze_pattern, build_content
from .severity import assess_severity, neutral_assessment
from .settings import (
    get_max_excerpts,
    get_min_confidence,
    get_patterns_path,
    is_excerpts_enabled,
    is_severity_assessment_enabled,
    is_trace_logging_enabled,
    load_environment,
)

_log = logging.getLogger(__name__)

# (event_name, details)
TraceCallback = Callable[[str, dict[str, Any]], None]
# (cause, geo) -> whether any charity serves it
CharityProbe = Callable[[str, str], bool]


def log_trace(event: str, details: dict[str, Any]) -> None:
    """Stock trace callback: forward engine events to the module logger."""
    _log.debug("classifier.%s %s", event, details)


def compute_confidence(
    best_score: float,
    runner_up_score: float | None = None,
    weights: ScoringWeights | None = None,
) -> float:
    """Map the winning score, and its lead over the runner-up, into [0, cap]."""
    w = weights or ScoringWeights()
    confidence = min(w.confidence_cap, w.confidence_base + best_score * w.confidence_slope)
    if runner_up_score is not None:
        gap = best_score - runner_up_score
        if gap > w.strong_gap:
            confidence = min(w.confidence_cap, confidence + w.strong_gap_boost)
        elif gap > w.clear_gap:
            confidence = min(w.confidence_cap, confidence + w.clear_gap_boost)
    return round(confidence, 4)


class CrisisClassifier:
    """Pattern-based crisis classifier.

    Parameters
    ----------
    patterns :
        Ordered pattern registry.  Defaults to the built-in registry.
    config :
        Weights and thresholds.
    trace :
        Optional ``(event, details)`` observer.  Failures inside it are
        logged and never affect the result.
    charity_probe :
        Optional ``(cause, geo) -> bool`` used to fill
        ``has_matching_charities``.  Without one the field is True.
    """

    def __init__(
        self,
        patterns: Iterable[SemanticPattern] | None = None,
        config: ClassifierConfig | None = None,
        *,
        trace: TraceCallback | None = None,
        charity_probe: CharityProbe | None = None,
    ) -> None:
        self._patterns: tuple[SemanticPattern, ...] = (
            tuple(patterns) if patterns is not None else default_patterns()
        )
        if not self._patterns:
            raise ValueError("At least one pattern is required.")
        self._by_cause = {p.cause: p for p in self._patterns}
        if len(self._by_cause) != len(self._patterns):
            raise ValueError("Pattern registry contains duplicate causes.")
        self._config = config or ClassifierConfig()
        self._trace = trace
        self._charity_probe = charity_probe

    @property
    def patterns(self) -> tuple[SemanticPattern, ...]:
        return self._patterns

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def _emit(self, event: str, details: dict[str, Any]) -> None:
        if self._trace is not None:
            try:
                self._trace(event, details)
            except Exception:
                _log.debug("Trace callback failed for %s", event, exc_info=True)

    def score_patterns(self, content: str) -> list[AnalysisResult]:
        """One AnalysisResult per registered pattern, in registry order."""
        results: list[AnalysisResult] = []
        for pattern in self._patterns:
            result = analyze_pattern(content, pattern, self._config.weights)
            self._emit(
                "pattern_scored",
                {
                    "cause": result.cause,
                    "score": result.score,
                    "negative_score": result.negative_score,
                    "geo": result.geo,
                    "matched_keywords": len(result.matched_keywords),
                },
            )
            results.append(result)
        return results

    def _has_matching_charities(self, cause: str, geo: str) -> bool:
        if self._charity_probe is None:
            return True
        try:
            return bool(self._charity_probe(cause, geo))
        except Exception:
            _log.warning("Charity probe failed for %s/%s", cause, geo, exc_info=True)
            return True

    def classify(
        self,
        url: str,
        title: str | None = None,
        body_text: str | None = None,
    ) -> Classification | None:
        """Classify one article, or return None when it is not a crisis."""
        if not isinstance(url, str):
            raise TypeError(f"url must be a string, got {type(url).__name__}")

        content = build_content(url, title, body_text)
        if not content.strip():
            self._emit("no_valid_patterns", {"reason": "empty_content"})
            return None

        ranked = sorted(
            (r for r in self.score_patterns(content) if r.score > 0),
            key=lambda r: r.score,
            reverse=True,
        )
        if not ranked:
            self._emit("no_valid_patterns", {})
            return None

        best = ranked[0]
        runner_up = ranked[1] if len(ranked) > 1 else None
        pattern = self._by_cause[best.cause]
        if best.score < pattern.min_score:
            self._emit(
                "below_min_score",
                {"cause": best.cause, "score": best.score, "min_score": pattern.min_score},
            )
            return None

        confidence = compute_confidence(
            best.score,
            runner_up.score if runner_up is not None else None,
            self._config.weights,
        )
        self._emit(
            "confidence_computed",
            {
                "cause": best.cause,
                "confidence": confidence,
                "runner_up": runner_up.cause if runner_up is not None else None,
            },
        )
        if confidence < self._config.min_confidence_threshold:
            self._emit(
                "below_confidence_threshold",
                {"confidence": confidence, "threshold": self._config.min_confidence_threshold},
            )
            return None

        excerpts: list[str] = []
        if body_text:
            excerpts = extract_excerpts(
                body_text,
                best.matched_keywords,
                self._config.max_excerpts,
                min_chars=self._config.min_sentence_chars,
            )
        severity = assess_severity(content) if self._config.assess_severity else neutral_assessment()

        classification = Classification(
            cause=best.cause,
            crisis_type=best.crisis_type,
            root_cause=best.root_cause,
            identified_needs=detect_needs(content),
            geo=best.geo,
            geo_name=best.geo_name,
            affected_groups=affected_groups_for(best.cause),
            confidence=confidence,
            article_title=title,
            article_url=url,
            matched_keywords=list(best.matched_keywords),
            relevant_excerpts=excerpts,
            has_matching_charities=self._has_matching_charities(best.cause, best.geo),
            detected_themes=list(best.detected_themes),
            severity_assessment=severity,
        )
        self._emit(
            "accepted",
            {"cause": classification.cause, "confidence": confidence, "geo": classification.geo},
        )
        return classification


def build_default_classifier() -> CrisisClassifier:
    """Build a classifier from environment settings and feature flags."""
    load_environment()
    patterns_path = get_patterns_path()
    patterns = load_patterns_file(patterns_path) if patterns_path else default_patterns()
    config = ClassifierConfig(
        min_confidence_threshold=get_min_confidence(),
        max_excerpts=get_max_excerpts() if is_excerpts_enabled() else 0,
        assess_severity=is_severity_assessment_enabled(),
    )
    trace = log_trace if is_trace_logging_enabled() else None
    return CrisisClassifier(patterns, config, trace=trace)


def classify_content(
    url: str,
    title: str | None = None,
    body_text: str | None = None,
) -> Classification | None:
    return build_default_classifier().classify(url, title, body_text)
