"""Lightweight crisis tagging for news-feed badges.

Much cheaper than :class:`~crisis_classifier.classifier.CrisisClassifier`
and independent of it: only the title and description are inspected, and
the best-scoring crisis type wins if its score reaches two.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .models import CrisisType

MIN_TAG_SCORE = 2
CONFIDENCE_DIVISOR = 5

# crisis type -> (badge label, keywords)
EVENT_TAG_PATTERNS: Dict[CrisisType, Tuple[str, List[str]]] = {
    "natural_disaster": (
        "Natural Disaster",
        [
            "earthquake", "tsunami", "hurricane", "tornado", "flood", "wildfire",
            "volcano", "landslide", "avalanche", "cyclone", "typhoon", "storm",
            "drought", "blizzard", "heatwave", "disaster", "emergency", "evacuation",
        ],
    ),
    "health_emergency": (
        "Health Emergency",
        [
            "outbreak", "epidemic", "pandemic", "disease", "virus", "infection",
            "health crisis", "medical emergency", "hospital", "vaccine", "treatment",
            "patient", "illness", "contamination", "public health", "WHO", "CDC",
        ],
    ),
    "conflict_displacement": (
        "Conflict & Displacement",
        [
            "war", "conflict", "refugee", "displaced", "violence", "attack",
            "military", "bombing", "casualties", "humanitarian crisis", "asylum",
            "migration", "persecution", "genocide", "ethnic cleansing", "civil war",
        ],
    ),
    "climate_disaster": (
        "Climate Crisis",
        [
            "climate change", "global warming", "sea level", "melting ice",
            "extreme weather", "carbon emissions", "greenhouse gas", "climate crisis",
            "environmental disaster", "deforestation", "desertification", "coral bleaching",
        ],
    ),
    "human_rights_violation": (
        "Human Rights",
        [
            "human rights", "abuse", "torture", "discrimination", "oppression",
            "injustice", "violation", "persecution", "freedom", "protest",
            "demonstration", "civil rights", "inequality", "exploitation",
        ],
    ),
}


class EventTag(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: CrisisType
    label: str
    confidence: float = Field(ge=0, le=1)
    matched_keywords: List[str] = Field(default_factory=list)


def _score(text: str, keywords: List[str]) -> tuple[int, List[str]]:
    hits = [k for k in keywords if k.lower() in text]
    # Each hit counts once per word of the phrase.
    return sum(len(k.split()) for k in hits), hits


def classify_news_article(title: str, description: str | None = None) -> EventTag | None:
    text = f"{title} {description or ''}".lower()

    best: tuple[CrisisType, int, List[str]] | None = None
    for crisis_type, (_, keywords) in EVENT_TAG_PATTERNS.items():
        score, hits = _score(text, keywords)
        if hits and (best is None or score > best[1]):
            best = (crisis_type, score, hits)

    if best is None or best[1] < MIN_TAG_SCORE:
        return None
    crisis_type, score, hits = best
    return EventTag(
        type=crisis_type,
        label=EVENT_TAG_PATTERNS[crisis_type][0],
        confidence=min(score / CONFIDENCE_DIVISOR, 1.0),
        matched_keywords=hits,
    )
