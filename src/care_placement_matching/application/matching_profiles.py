"""Loading and strict validation for matching weights profiles."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..config_file import format_validation_error
from ..domain.match_reasons import SCORED_NEEDS, ScoredNeed
from ..domain.matching import DEFAULT_WEIGHTS, MatchingWeights, NeedAdjustment
from ..exceptions import MatchingProfileFileNotFoundError, MatchingProfileValidationError
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _NeedAdjustmentModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    met: int
    unmet: int

    @field_validator("met")
    @classmethod
    def _validate_met(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError
        return value

    @field_validator("unmet")
    @classmethod
    def _validate_unmet(cls, value: int) -> int:
        if value > 0 or value < -100:
            raise ValueError
        return value


class _MatchingProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    base_score: int = DEFAULT_WEIGHTS.base_score
    needs: dict[ScoredNeed, _NeedAdjustmentModel]
    location_bonus: int = DEFAULT_WEIGHTS.location_bonus
    min_score: int = DEFAULT_WEIGHTS.min_score
    max_score: int = DEFAULT_WEIGHTS.max_score

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @field_validator("location_bonus")
    @classmethod
    def _validate_location_bonus(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_bounds(self) -> _MatchingProfileModel:
        if self.min_score >= self.max_score:
            raise ValueError("min_score must be below max_score")
        if not self.min_score <= self.base_score <= self.max_score:
            raise ValueError("base_score must lie within min_score and max_score")
        missing = [need for need in SCORED_NEEDS if need not in self.needs]
        if missing:
            raise ValueError(f"missing need weights: {', '.join(missing)}")
        return self


def _to_domain_weights(model: _MatchingProfileModel) -> MatchingWeights:
    adjustments: dict[ScoredNeed, NeedAdjustment] = {
        need: NeedAdjustment(met=model.needs[need].met, unmet=model.needs[need].unmet)
        for need in SCORED_NEEDS
    }
    return MatchingWeights(
        base_score=model.base_score,
        need_adjustments=MappingProxyType(adjustments),
        location_bonus=model.location_bonus,
        min_score=model.min_score,
        max_score=model.max_score,
    )


def load_matching_weights(*, path: Path, fs: FileSystem) -> MatchingWeights:
    """Load and validate a matching weights profile from JSON."""
    if not fs.exists(path):
        raise MatchingProfileFileNotFoundError(str(path))

    payload = fs.read_json(path)
    try:
        model = _MatchingProfileModel.model_validate(payload)
    except ValidationError as exc:
        raise MatchingProfileValidationError(str(path), format_validation_error(exc)) from exc

    return _to_domain_weights(model)


def resolve_matching_weights(profile_path: str, fs: FileSystem) -> MatchingWeights:
    """Return the weights at ``profile_path``, or the defaults when it is empty."""
    if not profile_path.strip():
        return DEFAULT_WEIGHTS
    return load_matching_weights(path=Path(profile_path), fs=fs)
