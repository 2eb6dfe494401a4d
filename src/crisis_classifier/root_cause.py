"""Root-cause attribution from driver vocabulary."""

from __future__ import annotations

from typing import List, Tuple

from .models import RootCause, SemanticPattern
from .taxonomy import matches_word

# Checked in order; the first family with a whole-word hit wins.
ROOT_CAUSE_RULES: List[Tuple[RootCause, List[str]]] = [
    ("climate_driven", ["climate change", "global warming", "climate crisis"]),
    ("conflict_driven", ["war", "conflict", "military", "armed groups"]),
    ("poverty_driven", ["poverty", "low-income", "lack of resources", "underfunded"]),
    ("policy_driven", ["policy", "policies", "government", "enforcement", "legislation"]),
]


def determine_root_cause(content: str, pattern: SemanticPattern) -> RootCause:
    for root_cause, terms in ROOT_CAUSE_RULES:
        if any(matches_word(content, term) for term in terms):
            return root_cause
    if pattern.typical_root_causes:
        return pattern.typical_root_causes[0]
    return "unknown"
