"""CLI entrypoint for classification, feed tagging, and benchmarking."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List

from pydantic import ValidationError

from .classifier import build_default_classifier
from .config import normalize_causes
from .evaluation import (
    export_results_csv,
    load_benchmark_cases,
    render_benchmark_report,
    run_benchmark,
    summarize_benchmark,
)
from .event_tags import classify_news_article
from .patterns import PATTERN_REGISTRY_VERSION, cause_label, default_patterns, load_patterns_file
from .settings import get_patterns_path, load_environment


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def cmd_classify(args: argparse.Namespace) -> int:
    text = args.text
    if args.text_file:
        try:
            text = Path(args.text_file).read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Could not read text file: {exc}")
            return 1

    try:
        classifier = build_default_classifier()
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        print(f"Classifier setup failed: {exc}")
        return 1

    result = classifier.classify(args.url, args.title, text)
    _print_json(
        result.model_dump(mode="json") if result is not None else {"classification": None}
    )
    return 0


def cmd_tag(args: argparse.Namespace) -> int:
    tag = classify_news_article(args.title, args.description)
    _print_json(tag.model_dump(mode="json") if tag is not None else None)
    return 0


def cmd_benchmark(args: argparse.Namespace) -> int:
    try:
        cases = load_benchmark_cases(args.cases)
        classifier = build_default_classifier()
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        print(f"Benchmark setup failed: {exc}")
        return 1

    results = run_benchmark(cases, classifier.classify)
    payload = summarize_benchmark(results)
    if args.report:
        report_path = Path(args.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(render_benchmark_report(results), encoding="utf-8")
        payload["report_path"] = str(report_path)
    if args.csv:
        csv_path = Path(args.csv)
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        csv_path.write_text(export_results_csv(results), encoding="utf-8")
        payload["csv_path"] = str(csv_path)
    _print_json(payload)
    return 0


def cmd_patterns(args: argparse.Namespace) -> int:
    load_environment()
    patterns_path = get_patterns_path()
    try:
        causes = normalize_causes(args.cause or [], strict=True)
        patterns = load_patterns_file(patterns_path) if patterns_path else default_patterns()
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        print(f"Pattern registry failed to load: {exc}")
        return 1
    if causes:
        patterns = tuple(p for p in patterns if p.cause in causes)

    payload = {
        "version": PATTERN_REGISTRY_VERSION if patterns_path is None else "custom",
        "source": str(patterns_path) if patterns_path else "built-in",
        "patterns": [
            {
                "cause": p.cause,
                "label": cause_label(p.cause),
                "crisis_type": p.crisis_type,
                "min_score": p.min_score,
                "core_indicators": len(p.core_indicators),
                "supporting_context": len(p.supporting_context),
                "action_indicators": len(p.action_indicators),
                "negative_indicators": len(p.negative_indicators),
                "locations": sorted(p.geo_keywords),
            }
            for p in patterns
        ],
    }
    _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="crisis-classifier")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (stderr)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    classify_parser = subparsers.add_parser("classify", help="Classify one article")
    classify_parser.add_argument("--url", required=True, help="Article URL")
    classify_parser.add_argument("--title", help="Article headline")
    text_group = classify_parser.add_mutually_exclusive_group()
    text_group.add_argument("--text", help="Article body text")
    text_group.add_argument("--text-file", help="Read article body text from a UTF-8 file")
    classify_parser.set_defaults(func=cmd_classify)

    tag_parser = subparsers.add_parser("tag", help="Tag a news headline with a crisis badge")
    tag_parser.add_argument("--title", required=True, help="Headline")
    tag_parser.add_argument("--description", default="", help="Teaser or description")
    tag_parser.set_defaults(func=cmd_tag)

    bench_parser = subparsers.add_parser("benchmark", help="Run the labelled benchmark corpus")
    bench_parser.add_argument("--cases", help="Path to a benchmark corpus JSON file")
    bench_parser.add_argument("--report", help="Write a markdown report to this path")
    bench_parser.add_argument("--csv", help="Write per-case results as CSV to this path")
    bench_parser.set_defaults(func=cmd_benchmark)

    patterns_parser = subparsers.add_parser("patterns", help="Show the active pattern registry")
    patterns_parser.add_argument(
        "--cause",
        action="append",
        help="Only show this cause (repeatable; aliases such as \"health\" accepted)",
    )
    patterns_parser.set_defaults(func=cmd_patterns)

    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
