import json
from pathlib import Path

import pytest

from crisis_classifier.feature_flags import DEFAULT_FEATURE_FLAGS, get_feature_flag, load_feature_flags


@pytest.fixture(autouse=True)
def _clear_flag_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in DEFAULT_FEATURE_FLAGS:
        monkeypatch.delenv(f"CRISIS_FLAG_{key.upper()}", raising=False)


def test_load_feature_flags_from_file(tmp_path: Path) -> None:
    path = tmp_path / "feature_flags.json"
    path.write_text(
        json.dumps(
            {
                "severity_assessment_enabled": False,
                "trace_logging_enabled": "yes",
                "max_excerpts_default": "5",
                "unknown_flag": True,
            }
        ),
        encoding="utf-8",
    )
    flags = load_feature_flags(path)
    assert flags["severity_assessment_enabled"] is False
    assert flags["trace_logging_enabled"] is True
    assert flags["excerpts_enabled"] is True
    assert flags["max_excerpts_default"] == 5
    assert "unknown_flag" not in flags


def test_missing_file_uses_defaults(tmp_path: Path) -> None:
    assert load_feature_flags(tmp_path / "absent.json") == DEFAULT_FEATURE_FLAGS


def test_unreadable_file_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "feature_flags.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_feature_flags(path) == DEFAULT_FEATURE_FLAGS


def test_env_override_wins_over_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "feature_flags.json"
    path.write_text(json.dumps({"excerpts_enabled": True, "max_excerpts_default": 2}), encoding="utf-8")
    monkeypatch.setenv("CRISIS_FLAG_EXCERPTS_ENABLED", "off")
    monkeypatch.setenv("CRISIS_FLAG_MAX_EXCERPTS_DEFAULT", "not-a-number")
    flags = load_feature_flags(path)
    assert flags["excerpts_enabled"] is False
    assert flags["max_excerpts_default"] == 3


def test_get_feature_flag_reads_cwd_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "feature_flags.json").write_text(
        json.dumps({"trace_logging_enabled": True}), encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert get_feature_flag("trace_logging_enabled") is True
    assert get_feature_flag("no_such_flag", "fallback") == "fallback"
