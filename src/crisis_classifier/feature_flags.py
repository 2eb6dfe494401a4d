"""Feature flags for the classifier's optional stages.

Flags are read from ``config/feature_flags.json`` in the working directory,
then overridden by ``CRISIS_FLAG_<NAME>`` environment variables:

- ``severity_assessment_enabled``: run the severity assessor on accepted
  articles; when off, a neutral low/normal assessment is attached.
- ``excerpts_enabled``: pull supporting sentences from the body text.
- ``max_excerpts_default``: how many excerpts to keep when enabled.
- ``trace_logging_enabled``: install :func:`~crisis_classifier.classifier.log_trace`
  so every acceptance gate is logged at DEBUG.

Only :func:`~crisis_classifier.classifier.build_default_classifier` reads
these; the engine itself takes an explicit ``ClassifierConfig``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

_log = logging.getLogger(__name__)

DEFAULT_FEATURE_FLAGS: dict[str, Any] = {
    "severity_assessment_enabled": True,
    "excerpts_enabled": True,
    "max_excerpts_default": 3,
    "trace_logging_enabled": False,
}


def default_feature_flags_path() -> Path:
    return Path.cwd() / "config" / "feature_flags.json"


def _coerce_flag_value(key: str, value: Any) -> Any:
    default = DEFAULT_FEATURE_FLAGS.get(key)
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        raw = str(value).strip().lower()
        return raw in {"1", "true", "yes", "on"}
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            return default
    return value


def load_feature_flags(path: Path | None = None) -> dict[str, Any]:
    flags = dict(DEFAULT_FEATURE_FLAGS)
    candidate = path or default_feature_flags_path()
    if candidate.exists():
        try:
            payload = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            _log.warning("Ignoring unreadable feature-flag file %s: %s", candidate, exc)
            payload = None
        if isinstance(payload, dict):
            for key in DEFAULT_FEATURE_FLAGS:
                if key in payload:
                    flags[key] = _coerce_flag_value(key, payload[key])

    # Env override: CRISIS_FLAG_<FLAG_NAME_UPPER>
    for key in DEFAULT_FEATURE_FLAGS:
        env_key = f"CRISIS_FLAG_{key.upper()}"
        raw = os.getenv(env_key, "").strip()
        if raw:
            flags[key] = _coerce_flag_value(key, raw)

    return flags


def get_feature_flag(name: str, default: Any = None) -> Any:
    flags = load_feature_flags()
    if name in flags:
        return flags[name]
    return default
