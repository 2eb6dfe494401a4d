import csv
import io
from pathlib import Path
from types import SimpleNamespace

import pytest

from crisis_classifier.classifier import CrisisClassifier
from crisis_classifier.evaluation import (
    BenchmarkCase,
    default_benchmark_path,
    export_results_csv,
    load_benchmark_cases,
    render_benchmark_report,
    run_benchmark,
    summarize_benchmark,
)

BUNDLED_CORPUS = Path(__file__).resolve().parents[1] / "config" / "benchmark_cases.json"


def _case(case_id: int, category: str, expected: str, title: str = "Headline") -> BenchmarkCase:
    return BenchmarkCase(
        id=case_id,
        title=title,
        source="Wire",
        url=f"https://example.org/{case_id}",
        category=category,
        subcategory="natural-disaster" if category == "crisis" else "sports",
        expected_cause=expected,
        content="Body text",
    )


def _stub(answers: dict[str, str | None]):
    def classify(url: str, title: str, text: str):
        cause = answers.get(url)
        if cause is None:
            return None
        return SimpleNamespace(cause=cause, confidence=0.8, matched_keywords=["flood", "rescue"])

    return classify


CASES = [
    _case(1, "crisis", "disaster_relief"),
    _case(2, "non-crisis", "none"),
    _case(3, "non-crisis", "none"),
    _case(4, "crisis", "health_crisis"),
    _case(5, "crisis", "climate_events"),
]

ANSWERS = {
    "https://example.org/1": "disaster_relief",
    "https://example.org/3": "social_justice",
    "https://example.org/5": "disaster_relief",
}


def test_run_benchmark_records_failure_reasons() -> None:
    results = run_benchmark(CASES, _stub(ANSWERS))
    by_id = {r.case_id: r for r in results}
    assert by_id[1].passed is True
    assert by_id[1].failure_reason is None
    assert by_id[2].passed is True
    assert by_id[2].predicted_cause == "none"
    assert by_id[3].failure_reason == "False positive: Classified as social_justice instead of non-crisis"
    assert by_id[4].failure_reason == "False negative: Failed to detect crisis"
    assert by_id[5].failure_reason == "Wrong category: Expected climate_events, got disaster_relief"


def test_summary_breaks_down_errors() -> None:
    summary = summarize_benchmark(run_benchmark(CASES, _stub(ANSWERS)))
    assert summary == {
        "total": 5,
        "passed": 2,
        "failed": 3,
        "accuracy": 40.0,
        "false_positives": 1,
        "false_negatives": 1,
        "wrong_category": 1,
    }


def test_empty_run_has_zero_accuracy() -> None:
    assert summarize_benchmark([])["accuracy"] == 0.0


def test_raising_classifier_is_recorded_not_propagated() -> None:
    def broken(url: str, title: str, text: str):
        raise RuntimeError("regex blew up")

    (result,) = run_benchmark([_case(1, "crisis", "disaster_relief")], broken)
    assert result.passed is False
    assert result.predicted_cause == "none"
    assert result.confidence == 0.0
    assert result.failure_reason == "Error during classification: regex blew up"


def test_report_lists_every_case() -> None:
    results = run_benchmark(CASES, _stub(ANSWERS))
    report = render_benchmark_report(results)
    assert report.startswith("# Classification Test Report")
    assert "- **Accuracy:** 40.00%" in report
    assert "- **False Positives:** 1" in report
    assert report.count("| PASS |") == 2
    assert report.count("| FAIL |") == 3
    assert "| 80% |" in report


def test_report_truncates_long_titles() -> None:
    long_title = "A" * 60
    results = run_benchmark([_case(1, "non-crisis", "none", title=long_title)], _stub({}))
    assert ("A" * 50 + "...") in render_benchmark_report(results)


def test_csv_export_truncates_keywords() -> None:
    def classify(url: str, title: str, text: str):
        return SimpleNamespace(
            cause="disaster_relief",
            confidence=0.5,
            matched_keywords=[f"kw{i}" for i in range(12)],
        )

    results = run_benchmark([_case(1, "crisis", "disaster_relief")], classify)
    rows = list(csv.reader(io.StringIO(export_results_csv(results))))
    assert rows[0][0] == "Test ID"
    assert rows[1][6] == "50.00"
    assert rows[1][7] == "; ".join(f"kw{i}" for i in range(10))
    assert rows[1][8] == "PASS"


def test_default_corpus_is_balanced() -> None:
    cases = load_benchmark_cases(BUNDLED_CORPUS)
    assert len(cases) == 100
    assert len({c.id for c in cases}) == 100
    crisis = [c for c in cases if c.category == "crisis"]
    assert len(crisis) == 50
    assert all(c.expected_cause == "none" for c in cases if c.category == "non-crisis")
    for cause in ("disaster_relief", "health_crisis", "climate_events", "humanitarian_crisis", "social_justice"):
        assert sum(1 for c in crisis if c.expected_cause == cause) == 10


def test_missing_corpus_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_benchmark_cases(tmp_path / "cases.json")


def test_default_corpus_path_follows_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert default_benchmark_path() == tmp_path / "config" / "benchmark_cases.json"
    with pytest.raises(FileNotFoundError):
        load_benchmark_cases()


def test_builtin_registry_scores_well_on_bundled_corpus() -> None:
    results = run_benchmark(load_benchmark_cases(BUNDLED_CORPUS), CrisisClassifier().classify)
    summary = summarize_benchmark(results)
    assert summary["total"] == 100
    assert summary["accuracy"] >= 95.0
