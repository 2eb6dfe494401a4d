import pytest

from crisis_classifier.event_tags import EVENT_TAG_PATTERNS, classify_news_article


def test_two_disaster_words_produce_a_badge() -> None:
    tag = classify_news_article("Earthquake triggers tsunami warning")
    assert tag is not None
    assert tag.type == "natural_disaster"
    assert tag.label == "Natural Disaster"
    assert tag.confidence == pytest.approx(0.4)
    assert tag.matched_keywords == ["earthquake", "tsunami"]


def test_single_keyword_is_not_enough() -> None:
    assert classify_news_article("Storm expected") is None


def test_no_keywords_returns_none() -> None:
    assert classify_news_article("Quarterly earnings beat estimates", "Shares rose") is None


def test_multi_word_keywords_count_per_word() -> None:
    tag = classify_news_article("Climate change fuels extreme weather")
    assert tag is not None
    assert tag.type == "climate_disaster"
    assert tag.label == "Climate Crisis"
    assert tag.confidence == pytest.approx(0.8)


def test_description_is_scanned_too() -> None:
    tag = classify_news_article("Cases rise", "Officials confirm an outbreak of a new virus")
    assert tag is not None
    assert tag.type == "health_emergency"


def test_tie_goes_to_first_declared_type() -> None:
    tag = classify_news_article("flood and storm, outbreak of disease")
    assert tag is not None
    assert tag.type == "natural_disaster"
    assert list(EVENT_TAG_PATTERNS)[0] == "natural_disaster"


def test_confidence_is_capped_at_one() -> None:
    tag = classify_news_article(
        "Earthquake, tsunami and landslide",
        "Flood and cyclone emergency forces evacuation after the disaster",
    )
    assert tag is not None
    assert tag.confidence == 1.0
