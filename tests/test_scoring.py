import pytest

from crisis_classifier.config import ScoringWeights
from crisis_classifier.models import SemanticPattern
from crisis_classifier.scoring import analyze_pattern, build_content


def _pattern(**overrides) -> SemanticPattern:
    record = {
        "cause": "disaster_relief",
        "crisis_type": "natural_disaster",
        "core_indicators": ["flood", "landslide"],
        "supporting_context": ["homes", "rescue"],
        "action_indicators": ["relief"],
        "negative_indicators": ["album", "tour", "band", "song"],
        "typical_root_causes": ["natural_phenomenon"],
    }
    record.update(overrides)
    return SemanticPattern.model_validate(record)


def test_build_content_joins_with_spaces() -> None:
    assert build_content("https://x.test/a", "Title", "Body") == "https://x.test/a Title Body"
    assert build_content("https://x.test/a") == "https://x.test/a  "


# ── Core-indicator gate ──────────────────────────────────────────────

def test_no_core_hit_scores_zero_even_with_support() -> None:
    result = analyze_pattern("Rescue crews brought relief to damaged homes", _pattern())
    assert result.score == 0
    assert result.matched_keywords == []
    assert result.crisis_type == "none"
    assert result.root_cause == "unknown"
    assert result.geo == "global"


def test_single_core_hit_without_corroboration_is_rejected() -> None:
    result = analyze_pattern("Flood warning issued for the valley", _pattern())
    assert result.score == 0
    assert result.detected_themes == []


def test_single_core_hit_with_corroboration_reaches_floor() -> None:
    result = analyze_pattern("Flood leaves homes underwater", _pattern())
    assert result.score == 6
    assert result.matched_keywords == ["flood", "homes"]
    assert result.detected_themes == ["flood"]
    assert result.context_score == 2
    assert result.crisis_type == "natural_disaster"
    assert result.root_cause == "natural_phenomenon"


def test_tiers_add_their_weights() -> None:
    result = analyze_pattern("Flood and landslide hit homes; rescue and relief under way", _pattern())
    # 2 core (8) + 2 context (4) + 1 action (2.5)
    assert result.score == pytest.approx(14.5)
    assert result.action_score == pytest.approx(2.5)
    assert result.matched_keywords == ["flood", "landslide", "homes", "rescue", "relief"]


def test_core_match_is_substring_based() -> None:
    result = analyze_pattern("Flooding and landslides bury homes", _pattern())
    assert result.detected_themes == ["flood", "landslide"]


# ── Negative evidence ────────────────────────────────────────────────

def test_negative_indicator_subtracts_exactly_two() -> None:
    base = analyze_pattern("Flood and landslide hit homes", _pattern())
    damped = analyze_pattern("Flood and landslide hit homes after the album launch", _pattern())
    assert base.score == 10
    assert damped.score == 8
    assert damped.negative_score == 2


def test_negative_indicators_match_whole_words_only() -> None:
    result = analyze_pattern("Flood and landslide hit homes near the bandstand", _pattern())
    assert result.negative_score == 0
    assert result.score == 10


def test_negative_penalty_never_drops_score_below_zero() -> None:
    result = analyze_pattern("flood landslide album tour band song", _pattern())
    assert result.negative_score == 8
    assert result.score == 0


# ── Geography and weights ────────────────────────────────────────────

def test_geo_match_count_boosts_score() -> None:
    pattern = _pattern(geo_keywords={"Nepal": ["nepal", "kathmandu"], "Peru": ["peru"]})
    result = analyze_pattern("Flood and landslide in Nepal destroy homes", pattern)
    assert result.geo == "nepal"
    assert result.geo_name == "Nepal"
    assert result.geo_score == 2
    assert result.score == 12


def test_custom_weights_change_single_core_floor() -> None:
    weights = ScoringWeights(core_weight=10)
    result = analyze_pattern("Flood warning issued for the valley", _pattern(), weights)
    assert result.score == 10


def test_root_cause_uses_driver_vocabulary() -> None:
    result = analyze_pattern("Flood and landslide blamed on climate change destroy homes", _pattern())
    assert result.root_cause == "climate_driven"
