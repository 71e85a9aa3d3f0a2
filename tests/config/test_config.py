"""Tests for MatchingConfig behaviour."""

import logging

import pytest

import care_placement_matching.config as config_module
from care_placement_matching.config import (
    BooleanEnvVarError,
    LogLevelEnvVarError,
    MatchingConfig,
)
from care_placement_matching.config_file import MatchingConfigFile


def _patch_env(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    def fake_getenv(key: str, default: str = "") -> str:
        return env.get(key, default)

    def fake_load_dotenv(dotenv_path: str | None = None) -> bool:
        _ = dotenv_path
        return True

    monkeypatch.setattr(config_module.os, "getenv", fake_getenv)
    monkeypatch.setattr(config_module, "load_dotenv", fake_load_dotenv)


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {})

    config = MatchingConfig.from_env()

    assert config == MatchingConfig()
    assert config.snapshot_path == "data/placements/snapshot.json"
    assert config.matching_profile_path == ""
    assert config.output_dir == "data/processed"
    assert config.include_ineligible is True
    assert config.logging_level == logging.INFO


def test_from_env_reads_matching_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(
        monkeypatch,
        {
            "PLACEMENT_SNAPSHOT_PATH": " exports/snapshot.json ",
            "MATCHING_PROFILE_PATH": "data/reference/matching_profile.json",
            "MATCH_OUTPUT_DIR": "reports",
            "INCLUDE_INELIGIBLE": "no",
            "MATCH_LOG_LEVEL": "debug",
        },
    )

    config = MatchingConfig.from_env()

    assert config.snapshot_path == "exports/snapshot.json"
    assert config.matching_profile_path == "data/reference/matching_profile.json"
    assert config.output_dir == "reports"
    assert config.include_ineligible is False
    assert config.log_level == "DEBUG"
    assert config.logging_level == logging.DEBUG


def test_from_env_rejects_invalid_boolean(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {"INCLUDE_INELIGIBLE": "sometimes"})

    with pytest.raises(BooleanEnvVarError, match="INCLUDE_INELIGIBLE"):
        MatchingConfig.from_env()


def test_from_env_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {"MATCH_LOG_LEVEL": "LOUD"})

    with pytest.raises(LogLevelEnvVarError, match="MATCH_LOG_LEVEL"):
        MatchingConfig.from_env()


def test_with_overrides_preserves_fields() -> None:
    base = MatchingConfig(
        snapshot_path="exports/snapshot.json",
        matching_profile_path="profiles/strict.json",
        output_dir="reports",
        include_ineligible=True,
        log_level="WARNING",
    )

    updated = base.with_overrides(output_dir=" out ", include_ineligible=False)

    assert updated.output_dir == "out"
    assert updated.include_ineligible is False
    assert updated.snapshot_path == base.snapshot_path
    assert updated.matching_profile_path == base.matching_profile_path
    assert updated.log_level == base.log_level


def test_with_file_overrides_only_replaces_set_values() -> None:
    base = MatchingConfig(output_dir="reports")

    updated = base.with_file_overrides(
        MatchingConfigFile(snapshot_path="exports/snapshot.json", log_level="ERROR")
    )

    assert updated.snapshot_path == "exports/snapshot.json"
    assert updated.log_level == "ERROR"
    assert updated.output_dir == "reports"
    assert updated.include_ineligible is True
