"""Labelled-corpus benchmark for the classifier.

The corpus mixes crisis coverage with entertainment, sports, technology,
opinion and retrospective pieces that borrow crisis vocabulary.  Any
``classify(url, title, text)`` callable can be benchmarked, which lets the
tests drive the runner with stubs.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, List, Literal

from pydantic import BaseModel, ConfigDict

from .classifier import build_default_classifier
from .models import Classification

_log = logging.getLogger(__name__)

ClassifyFn = Callable[[str, str, str], Classification | None]

CSV_HEADER = [
    "Test ID", "Title", "Source", "Actual Category", "Expected Cause",
    "Predicted Cause", "Confidence", "Matched Keywords", "Pass/Fail", "Failure Reason",
]
MAX_CSV_KEYWORDS = 10
REPORT_TITLE_CHARS = 50


def default_benchmark_path() -> Path:
    return Path.cwd() / "config" / "benchmark_cases.json"


class BenchmarkCase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    source: str
    url: str
    category: Literal["crisis", "non-crisis"]
    subcategory: str
    expected_cause: str
    content: str


@dataclass
class BenchmarkResult:
    case_id: int
    title: str
    source: str
    actual_category: str
    predicted_cause: str
    expected_cause: str
    confidence: float
    matched_keywords: list[str] = field(default_factory=list)
    passed: bool = False
    failure_reason: str | None = None


def load_benchmark_cases(path: str | Path | None = None) -> list[BenchmarkCase]:
    corpus_path = Path(path) if path else default_benchmark_path()
    if not corpus_path.exists():
        raise FileNotFoundError(f"Benchmark corpus not found: {corpus_path}")
    payload = json.loads(corpus_path.read_text(encoding="utf-8"))
    records = payload.get("cases", []) if isinstance(payload, dict) else payload
    return [BenchmarkCase.model_validate(r) for r in records]


def _failure_reason(case: BenchmarkCase, predicted: str) -> str:
    if case.category == "non-crisis" and predicted != "none":
        return f"False positive: Classified as {predicted} instead of non-crisis"
    if case.category == "crisis" and predicted == "none":
        return "False negative: Failed to detect crisis"
    return f"Wrong category: Expected {case.expected_cause}, got {predicted}"


def run_benchmark(
    cases: Iterable[BenchmarkCase],
    classify: ClassifyFn | None = None,
) -> list[BenchmarkResult]:
    if classify is None:
        classify = build_default_classifier().classify

    results: list[BenchmarkResult] = []
    for case in cases:
        try:
            classification = classify(case.url, case.title, case.content)
        except Exception as exc:
            _log.warning("Benchmark case %s raised: %s", case.id, exc)
            results.append(
                BenchmarkResult(
                    case_id=case.id,
                    title=case.title,
                    source=case.source,
                    actual_category=case.subcategory,
                    predicted_cause="none",
                    expected_cause=case.expected_cause,
                    confidence=0.0,
                    failure_reason=f"Error during classification: {exc}",
                )
            )
            continue

        predicted = classification.cause if classification else "none"
        passed = predicted == case.expected_cause
        results.append(
            BenchmarkResult(
                case_id=case.id,
                title=case.title,
                source=case.source,
                actual_category=case.subcategory,
                predicted_cause=predicted,
                expected_cause=case.expected_cause,
                confidence=classification.confidence if classification else 0.0,
                matched_keywords=list(classification.matched_keywords) if classification else [],
                passed=passed,
                failure_reason=None if passed else _failure_reason(case, predicted),
            )
        )
    return results


def summarize_benchmark(results: List[BenchmarkResult]) -> dict[str, Any]:
    total = len(results)
    passed = sum(1 for r in results if r.passed)
    failed = [r for r in results if not r.passed]
    return {
        "total": total,
        "passed": passed,
        "failed": len(failed),
        "accuracy": round(passed / total * 100, 2) if total else 0.0,
        "false_positives": sum(
            1 for r in failed if r.expected_cause == "none" and r.predicted_cause != "none"
        ),
        "false_negatives": sum(
            1 for r in failed if r.expected_cause != "none" and r.predicted_cause == "none"
        ),
        "wrong_category": sum(
            1 for r in failed if r.expected_cause != "none" and r.predicted_cause != "none"
        ),
    }


def render_benchmark_report(results: List[BenchmarkResult]) -> str:
    summary = summarize_benchmark(results)
    lines = [
        "# Classification Test Report",
        "",
        "## Summary",
        "",
        f"- **Total Tests:** {summary['total']}",
        f"- **Passed:** {summary['passed']}",
        f"- **Failed:** {summary['failed']}",
        f"- **Accuracy:** {summary['accuracy']:.2f}%",
        "",
        "### Error Breakdown",
        "",
        f"- **False Positives:** {summary['false_positives']} (non-crisis classified as crisis)",
        f"- **False Negatives:** {summary['false_negatives']} (crisis not detected)",
        f"- **Wrong Category:** {summary['wrong_category']} (crisis detected but wrong type)",
        "",
        "## Detailed Results",
        "",
        "| ID | Title | Source | Actual Category | Expected | Predicted | Confidence | Pass/Fail | Failure Reason |",
        "|----|-------|--------|----------------|----------|-----------|------------|-----------|----------------|",
    ]
    for r in results:
        status = "PASS" if r.passed else "FAIL"
        title = r.title[:REPORT_TITLE_CHARS] + ("..." if len(r.title) > REPORT_TITLE_CHARS else "")
        lines.append(
            f"| {r.case_id} | {title} | {r.source} | {r.actual_category} | {r.expected_cause} "
            f"| {r.predicted_cause} | {r.confidence * 100:.0f}% | {status} | {r.failure_reason or '-'} |"
        )
    return "\n".join(lines) + "\n"


def export_results_csv(results: List[BenchmarkResult]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for r in results:
        writer.writerow(
            [
                r.case_id,
                r.title,
                r.source,
                r.actual_category,
                r.expected_cause,
                r.predicted_cause,
                f"{r.confidence * 100:.2f}",
                "; ".join(r.matched_keywords[:MAX_CSV_KEYWORDS]),
                "PASS" if r.passed else "FAIL",
                r.failure_reason or "",
            ]
        )
    return buffer.getvalue()
