"""Centralised, injectable configuration for care placement matching."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import MatchingConfigFile

DEFAULT_SNAPSHOT_PATH = "data/placements/snapshot.json"
DEFAULT_OUTPUT_DIR = "data/processed"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class BooleanEnvVarError(ValueError):
    """Raised when an environment variable must be a supported boolean."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a boolean value (true/false, 1/0, yes/no, on/off).")


class LogLevelEnvVarError(ValueError):
    """Raised when an environment variable must name a logging level."""

    def __init__(self, env_name: str) -> None:
        levels = ", ".join(sorted(LOG_LEVELS))
        super().__init__(f"{env_name} must be one of: {levels}.")


@dataclass(frozen=True)
class MatchingConfig:
    """Immutable configuration for matching entry points.

    Load from environment with `MatchingConfig.from_env()` or construct directly for testing.
    """

    # Inputs
    snapshot_path: str = DEFAULT_SNAPSHOT_PATH
    matching_profile_path: str = ""

    # Outputs
    output_dir: str = DEFAULT_OUTPUT_DIR
    include_ineligible: bool = True

    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            MatchingConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        include_ineligible = _parse_optional_bool(
            os.getenv("INCLUDE_INELIGIBLE", ""),
            env_name="INCLUDE_INELIGIBLE",
        )
        return cls(
            snapshot_path=os.getenv("PLACEMENT_SNAPSHOT_PATH", "").strip()
            or DEFAULT_SNAPSHOT_PATH,
            matching_profile_path=os.getenv("MATCHING_PROFILE_PATH", "").strip(),
            output_dir=os.getenv("MATCH_OUTPUT_DIR", "").strip() or DEFAULT_OUTPUT_DIR,
            include_ineligible=True if include_ineligible is None else include_ineligible,
            log_level=_parse_log_level(os.getenv("MATCH_LOG_LEVEL", ""), env_name="MATCH_LOG_LEVEL"),
        )

    @property
    def logging_level(self) -> int:
        """Return the numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]

    def with_overrides(
        self,
        *,
        snapshot_path: str | None = None,
        matching_profile_path: str | None = None,
        output_dir: str | None = None,
        include_ineligible: bool | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            snapshot_path=self.snapshot_path if snapshot_path is None else snapshot_path.strip(),
            matching_profile_path=self.matching_profile_path
            if matching_profile_path is None
            else matching_profile_path.strip(),
            output_dir=self.output_dir if output_dir is None else output_dir.strip(),
            include_ineligible=self.include_ineligible
            if include_ineligible is None
            else include_ineligible,
        )

    def with_file_overrides(self, file_config: MatchingConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            snapshot_path=self.snapshot_path
            if file_config.snapshot_path is None
            else file_config.snapshot_path,
            matching_profile_path=self.matching_profile_path
            if file_config.matching_profile_path is None
            else file_config.matching_profile_path,
            output_dir=self.output_dir
            if file_config.output_dir is None
            else file_config.output_dir,
            include_ineligible=self.include_ineligible
            if file_config.include_ineligible is None
            else file_config.include_ineligible,
            log_level=self.log_level if file_config.log_level is None else file_config.log_level,
        )


def _parse_optional_bool(value: str, *, env_name: str) -> bool | None:
    """Parse an optional boolean from an environment variable."""
    text = value.strip().lower()
    if not text:
        return None
    if text in {"1", "true", "yes", "y", "on"}:
        return True
    if text in {"0", "false", "no", "n", "off"}:
        return False
    raise BooleanEnvVarError(env_name)


def _parse_log_level(value: str, *, env_name: str) -> str:
    """Parse a logging level name, defaulting to INFO."""
    text = value.strip().upper()
    if not text:
        return DEFAULT_LOG_LEVEL
    if text not in LOG_LEVELS:
        raise LogLevelEnvVarError(env_name)
    return text
