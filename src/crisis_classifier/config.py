"""Engine configuration: scoring weights, thresholds, and cause-name validation."""

from __future__ import annotations

import re
from typing import List

from pydantic import BaseModel, ConfigDict, Field

ALLOWED_CAUSES = (
    "disaster_relief",
    "health_crisis",
    "climate_events",
    "humanitarian_crisis",
    "social_justice",
)

MIN_CONFIDENCE_THRESHOLD = 0.35

_CAUSE_ALIAS_MAP = {
    "disaster relief": "disaster_relief",
    "disaster": "disaster_relief",
    "disasters": "disaster_relief",
    "natural disaster": "disaster_relief",
    "health crisis": "health_crisis",
    "health": "health_crisis",
    "health emergency": "health_crisis",
    "epidemic": "health_crisis",
    "climate events": "climate_events",
    "climate event": "climate_events",
    "climate": "climate_events",
    "climate disaster": "climate_events",
    "humanitarian crisis": "humanitarian_crisis",
    "humanitarian": "humanitarian_crisis",
    "conflict": "humanitarian_crisis",
    "social justice": "social_justice",
    "social": "social_justice",
    "human rights": "social_justice",
}


def canonicalize_cause(value: str) -> str | None:
    cleaned = value.strip().lower()
    if not cleaned:
        return None
    if cleaned in ALLOWED_CAUSES:
        return cleaned
    key = re.sub(r"\s+", " ", re.sub(r"[_/\-]+", " ", cleaned)).strip()
    return _CAUSE_ALIAS_MAP.get(key)


def normalize_causes(values: List[str], *, strict: bool = False) -> List[str]:
    normalized: list[str] = []
    invalid: list[str] = []
    for value in values:
        canonical = canonicalize_cause(value)
        if canonical:
            if canonical not in normalized:
                normalized.append(canonical)
        else:
            cleaned = value.strip().lower()
            if cleaned:
                invalid.append(cleaned)
    if strict and invalid:
        raise ValueError(f"Invalid cause(s): {', '.join(sorted(set(invalid)))}")
    return normalized


class ScoringWeights(BaseModel):
    """Point values used by the indicator scorer and the confidence formula."""

    model_config = ConfigDict(frozen=True)

    core_weight: float = Field(default=4, ge=0)
    context_weight: float = Field(default=2, ge=0)
    action_weight: float = Field(default=2.5, ge=0)
    negative_penalty: float = Field(default=2, ge=0)
    geo_weight: float = Field(default=2, ge=0)
    single_core_floor: float = Field(default=6, ge=0)

    confidence_base: float = Field(default=0.35, ge=0, le=1)
    confidence_slope: float = Field(default=0.04, ge=0)
    confidence_cap: float = Field(default=0.95, gt=0, le=1)
    strong_gap: float = Field(default=5, ge=0)
    strong_gap_boost: float = Field(default=0.15, ge=0)
    clear_gap: float = Field(default=3, ge=0)
    clear_gap_boost: float = Field(default=0.08, ge=0)


class ClassifierConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    min_confidence_threshold: float = Field(default=MIN_CONFIDENCE_THRESHOLD, ge=0, le=1)
    max_excerpts: int = Field(default=3, ge=0, le=20)
    min_sentence_chars: int = Field(default=30, ge=0)
    assess_severity: bool = True
