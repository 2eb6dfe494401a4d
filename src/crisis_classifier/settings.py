"""Environment and runtime settings."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .config import MIN_CONFIDENCE_THRESHOLD
from .feature_flags import get_feature_flag


def load_environment() -> None:
    load_dotenv(override=False)


def get_patterns_path() -> Path | None:
    raw = os.getenv("CRISIS_PATTERNS_PATH", "").strip()
    return Path(raw) if raw else None


def get_min_confidence() -> float:
    raw = os.getenv("CRISIS_MIN_CONFIDENCE", "").strip()
    if not raw:
        return MIN_CONFIDENCE_THRESHOLD
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"CRISIS_MIN_CONFIDENCE must be a number, got {raw!r}") from exc
    if not 0 <= value <= 1:
        raise ValueError(f"CRISIS_MIN_CONFIDENCE must be within [0, 1], got {value}")
    return value


def is_severity_assessment_enabled() -> bool:
    return bool(get_feature_flag("severity_assessment_enabled", True))


def is_excerpts_enabled() -> bool:
    return bool(get_feature_flag("excerpts_enabled", True))


def get_max_excerpts() -> int:
    return int(get_feature_flag("max_excerpts_default", 3))


def is_trace_logging_enabled() -> bool:
    return bool(get_feature_flag("trace_logging_enabled", False))
