import json
from pathlib import Path

import pytest

from crisis_classifier.feature_flags import DEFAULT_FEATURE_FLAGS
from crisis_classifier.main import main

QUAKE = {
    "id": 1,
    "title": "Earthquake devastates region, thousands displaced",
    "source": "Wire",
    "url": "https://news.example.org/world/quake-report",
    "category": "crisis",
    "subcategory": "natural-disaster",
    "expected_cause": "disaster_relief",
    "content": (
        "A powerful earthquake in Chile has left entire towns in ruins. "
        "Thousands of families were displaced and rescue teams are searching for survivors "
        "trapped under debris. Authorities opened emergency shelter sites in Santiago as aid "
        "workers arrive."
    ),
}
MUSIC = {
    "id": 2,
    "title": "Ember review: a fire performance on the new album",
    "source": "Music Weekly",
    "url": "https://music.example.com/reviews/ember-album",
    "category": "non-crisis",
    "subcategory": "entertainment-music",
    "expected_cause": "none",
    "content": (
        "The band opened its tour in Chicago with a fire performance that had fans singing "
        "every lyric. The new album leans on heavy guitars and big choruses, and the setlist "
        "mixed old favourites with songs from the record."
    ),
}


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CRISIS_PATTERNS_PATH", raising=False)
    monkeypatch.delenv("CRISIS_MIN_CONFIDENCE", raising=False)
    for key in DEFAULT_FEATURE_FLAGS:
        monkeypatch.delenv(f"CRISIS_FLAG_{key.upper()}", raising=False)


def test_classify_command(capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["classify", "--url", QUAKE["url"], "--title", QUAKE["title"], "--text", QUAKE["content"]])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["cause"] == "disaster_relief"
    assert payload["geo"] == "chile"
    assert payload["severity_assessment"]["level"] == "low"


def test_classify_command_reads_text_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    body = tmp_path / "body.txt"
    body.write_text(MUSIC["content"], encoding="utf-8")
    rc = main(["classify", "--url", MUSIC["url"], "--title", MUSIC["title"], "--text-file", str(body)])
    assert rc == 0
    assert json.loads(capsys.readouterr().out) == {"classification": None}


def test_classify_command_reports_bad_settings(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("CRISIS_MIN_CONFIDENCE", "lots")
    assert main(["classify", "--url", "https://x.test/a"]) == 1
    assert "Classifier setup failed" in capsys.readouterr().out


def test_tag_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["tag", "--title", "Earthquake triggers tsunami warning"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["type"] == "natural_disaster"
    assert payload["confidence"] == pytest.approx(0.4)


def test_patterns_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["patterns"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["version"] == "1"
    assert payload["source"] == "built-in"
    assert [p["cause"] for p in payload["patterns"]] == [
        "disaster_relief",
        "health_crisis",
        "climate_events",
        "humanitarian_crisis",
        "social_justice",
    ]


def test_benchmark_command_writes_report_and_csv(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    corpus = tmp_path / "cases.json"
    corpus.write_text(json.dumps({"version": "1", "cases": [QUAKE, MUSIC]}), encoding="utf-8")
    report = tmp_path / "out" / "report.md"
    csv_path = tmp_path / "out" / "results.csv"

    rc = main(["benchmark", "--cases", str(corpus), "--report", str(report), "--csv", str(csv_path)])
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["total"] == 2
    assert payload["passed"] == 2
    assert payload["accuracy"] == 100.0
    assert payload["report_path"] == str(report)
    assert "| PASS |" in report.read_text(encoding="utf-8")
    assert csv_path.read_text(encoding="utf-8").startswith("Test ID,")


def test_benchmark_command_missing_corpus(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["benchmark", "--cases", str(tmp_path / "absent.json")]) == 1
    assert "Benchmark setup failed" in capsys.readouterr().out


def test_patterns_command_filters_by_cause_alias(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["patterns", "--cause", "health", "--cause", "Social Justice"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [p["cause"] for p in payload["patterns"]] == ["health_crisis", "social_justice"]


def test_patterns_command_rejects_unknown_cause(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["patterns", "--cause", "sports"]) == 1
    assert "Invalid cause(s): sports" in capsys.readouterr().out
