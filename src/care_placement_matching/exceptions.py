"""Custom exceptions for care placement matching.

These exceptions provide clear error handling and enable testing of error paths.
The matching engine itself raises none of them; they come from the boundaries
that load inputs and configuration.
"""

from __future__ import annotations


class PlacementMatchingError(Exception):
    """Base exception for all placement matching errors."""

    pass


class ReferralNotFoundError(PlacementMatchingError):
    """Raised when a referral id is unknown to the referral provider."""

    def __init__(self, referral_id: str) -> None:
        self.referral_id = referral_id
        super().__init__(f"Referral not found: {referral_id}")


class SnapshotFileNotFoundError(PlacementMatchingError):
    """Raised when a placement snapshot file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Placement snapshot not found: {path}\n"
            "Set PLACEMENT_SNAPSHOT_PATH or pass --snapshot with a valid file."
        )


class SnapshotValidationError(PlacementMatchingError):
    """Raised when a placement snapshot fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid placement snapshot {path}: {detail}")


class MatchingProfileFileNotFoundError(PlacementMatchingError):
    """Raised when a matching weights profile file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Matching profile not found: {path}")


class MatchingProfileValidationError(PlacementMatchingError):
    """Raised when a matching weights profile fails validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid matching profile {path}: {detail}")


class ConfigFileNotFoundError(PlacementMatchingError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(PlacementMatchingError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(PlacementMatchingError):
    """Raised when a config file has unknown keys or invalid values."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid config file {path}: {detail}")


class MatchingConfigMissingError(PlacementMatchingError):
    """Raised when an entry point is called without configuration."""

    def __init__(self) -> None:
        super().__init__(
            "MatchingConfig is required. Load it once at the entry point with "
            "MatchingConfig.from_env() and pass it through."
        )


class DependencyMissingError(PlacementMatchingError):
    """Raised when a required collaborator was not injected."""

    def __init__(self, dependency: str, *, reason: str) -> None:
        self.dependency = dependency
        super().__init__(f"{dependency} is required. {reason}")
