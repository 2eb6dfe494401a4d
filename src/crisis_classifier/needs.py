"""Multi-label humanitarian needs tagger.

Runs on the full content independently of cause classification, so it is
deliberately more permissive: any keyword substring tags the category.
"""

from __future__ import annotations

from typing import Dict, List

from .models import IdentifiedNeed

NEEDS_KEYWORDS: Dict[IdentifiedNeed, List[str]] = {
    "food": [
        "food", "hunger", "famine", "starvation", "malnutrition", "meals",
        "food insecurity", "food shortage", "food aid", "emergency food",
        "nutrition", "feeding", "hungry",
    ],
    "shelter": [
        "shelter", "housing", "homeless", "displaced", "evacuation",
        "temporary shelter", "emergency shelter", "accommodation", "refuge",
        "homes destroyed", "buildings collapsed", "roofless",
    ],
    "medical": [
        "medical", "healthcare", "hospital", "treatment", "medicine",
        "doctors", "nurses", "surgery", "medical supplies", "health",
        "injured", "sick", "patients", "medical care", "emergency medical",
    ],
    "water": [
        "water", "clean water", "drinking water", "water shortage",
        "water scarcity", "dehydration", "water infrastructure",
        "water access", "contaminated water", "water supply",
    ],
    "legal_aid": [
        "legal", "lawyer", "attorney", "legal aid", "legal representation",
        "deportation defense", "legal services", "court", "legal help",
        "immigration lawyer", "legal assistance",
    ],
    "rescue": [
        "rescue", "trapped", "search and rescue", "emergency rescue",
        "rescue operations", "rescue teams", "stranded",
    ],
    "education": [
        "education", "school", "students", "learning", "teachers",
        "educational", "classroom", "scholarship", "tuition",
    ],
    "mental_health": [
        "mental health", "trauma", "psychological", "counseling",
        "therapy", "ptsd", "mental health support", "psychosocial",
    ],
    "winterization": [
        "winter", "cold", "heating", "insulation", "blankets",
        "winter clothing", "freezing", "winterization", "warm",
    ],
    "sanitation": [
        "sanitation", "hygiene", "toilets", "waste", "sewage",
        "sanitary", "hygiene kits", "latrines", "sanitation facilities",
    ],
}


def detect_needs(content: str) -> List[IdentifiedNeed]:
    haystack = content.casefold()
    return [
        need
        for need, keywords in NEEDS_KEYWORDS.items()
        if any(k in haystack for k in keywords)
    ]
