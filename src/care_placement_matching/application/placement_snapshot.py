"""Loading and strict validation for placement snapshots.

A snapshot is a JSON export of the homes, referrals and threads the matcher
reads. ``PlacementSnapshot`` serves it through the referral, home and thread
provider protocols.

Usage example:
    >>> from pathlib import Path
    >>> from care_placement_matching.application.placement_snapshot import (
    ...     load_placement_snapshot,
    ... )
    >>> fs = ...  # Injected FileSystem from the CLI/composition root
    >>> snapshot = load_placement_snapshot(path=Path("data/placements/snapshot.json"), fs=fs)
    >>> referral = snapshot.get_referral("r1")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing_extensions import override

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..config_file import format_validation_error
from ..domain.placement import (
    ChildNeeds,
    ChildProfile,
    Gender,
    Home,
    HomeCapabilities,
    HomeConstraints,
    LegalBasis,
    LegalStatus,
    Priority,
    Referral,
    ReferralStatus,
    Thread,
)
from ..exceptions import SnapshotFileNotFoundError, SnapshotValidationError
from ..protocols import FileSystem, HomeProvider, ReferralProvider, ThreadIndexProvider

_SCHEMA_VERSION = 1


class _HomeConstraintsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    min_age: int
    max_age: int
    gender_allowed: tuple[Gender, ...]
    notes: str | None = None

    @field_validator("min_age", "max_age")
    @classmethod
    def _validate_age(cls, value: int) -> int:
        if value < 0:
            raise ValueError
        return value


class _HomeCapabilitiesModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    diabetes_trained: bool = False
    trauma_informed: bool = False
    adhd_support: bool = False
    specialist_staff: bool = False
    mental_health: bool = False


class _HomeModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    location: str
    free_beds: int
    constraints: _HomeConstraintsModel
    capabilities: _HomeCapabilitiesModel
    is_registered: bool | None = None

    @field_validator("id", "name")
    @classmethod
    def _validate_non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("free_beds")
    @classmethod
    def _validate_free_beds(cls, value: int) -> int:
        if value < 0:
            raise ValueError
        return value


class _ChildProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    age: int
    gender: Gender
    location: str
    local_authority: str

    @field_validator("age")
    @classmethod
    def _validate_age(cls, value: int) -> int:
        if value < 0 or value > 18:
            raise ValueError
        return value


class _ChildNeedsModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    adhd: bool = False
    diabetes: bool = False
    trauma: bool = False
    specialist_staff: bool = False
    mental_health: bool = False
    self_harm: bool = False
    violence: bool = False
    absconding: bool = False


class _LegalStatusModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    applicable: bool
    legal_basis: LegalBasis = "NONE"
    order_ref: str | None = None
    court: str | None = None
    date_made: date | None = None
    expiry_date: date | None = None
    review_due: date | None = None
    authorised_restrictions: tuple[str, ...] = ()
    placement_registered: bool | None = None
    notes: str | None = None


class _ReferralModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    external_case_ref: str
    priority: Priority
    status: ReferralStatus = "NEW"
    triage_score: int = 0
    child_profile: _ChildProfileModel
    needs: _ChildNeedsModel
    legal_status: _LegalStatusModel | None = None
    missing_info: tuple[str, ...] = ()

    @field_validator("id")
    @classmethod
    def _validate_id(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("triage_score")
    @classmethod
    def _validate_triage_score(cls, value: int) -> int:
        if value < 0 or value > 100:
            raise ValueError
        return value


class _ThreadModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    referral_id: str
    home_id: str


class _PlacementSnapshotModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    homes: tuple[_HomeModel, ...] = ()
    referrals: tuple[_ReferralModel, ...] = ()
    threads: tuple[_ThreadModel, ...] = ()

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_references(self) -> _PlacementSnapshotModel:
        home_ids = [home.id for home in self.homes]
        referral_ids = [referral.id for referral in self.referrals]
        if len(set(home_ids)) != len(home_ids):
            raise ValueError("duplicate home id")
        if len(set(referral_ids)) != len(referral_ids):
            raise ValueError("duplicate referral id")
        known_homes = set(home_ids)
        known_referrals = set(referral_ids)
        for thread in self.threads:
            if thread.home_id not in known_homes:
                raise ValueError(f"thread {thread.id} references unknown home")
            if thread.referral_id not in known_referrals:
                raise ValueError(f"thread {thread.id} references unknown referral")
        return self


def _to_domain_home(model: _HomeModel) -> Home:
    return Home(
        id=model.id,
        name=model.name,
        location=model.location,
        free_beds=model.free_beds,
        constraints=HomeConstraints(
            min_age=model.constraints.min_age,
            max_age=model.constraints.max_age,
            gender_allowed=model.constraints.gender_allowed,
            notes=model.constraints.notes,
        ),
        capabilities=HomeCapabilities(**model.capabilities.model_dump()),
        is_registered=model.is_registered,
    )


def _to_domain_legal_status(model: _LegalStatusModel | None) -> LegalStatus | None:
    if model is None:
        return None
    return LegalStatus(**model.model_dump())


def _to_domain_referral(model: _ReferralModel) -> Referral:
    return Referral(
        id=model.id,
        external_case_ref=model.external_case_ref,
        priority=model.priority,
        status=model.status,
        triage_score=model.triage_score,
        child_profile=ChildProfile(**model.child_profile.model_dump()),
        needs=ChildNeeds(**model.needs.model_dump()),
        legal_status=_to_domain_legal_status(model.legal_status),
        missing_info=model.missing_info,
    )


@dataclass(frozen=True)
class PlacementSnapshot(ReferralProvider, HomeProvider, ThreadIndexProvider):
    """Read-only referral, home and thread provider over one loaded snapshot."""

    homes: tuple[Home, ...] = ()
    referrals: tuple[Referral, ...] = ()
    threads: tuple[Thread, ...] = ()

    @override
    def get_referral(self, referral_id: str) -> Referral | None:
        for referral in self.referrals:
            if referral.id == referral_id:
                return referral
        return None

    @override
    def list_homes(self) -> Sequence[Home]:
        return self.homes

    @override
    def thread_index(self, referral_id: str) -> dict[str, str]:
        # Later threads for the same home win.
        return {
            thread.home_id: thread.id
            for thread in self.threads
            if thread.referral_id == referral_id
        }


def parse_placement_snapshot(payload: object) -> PlacementSnapshot:
    """Validate a decoded snapshot payload and convert it to domain records.

    Raises:
        pydantic.ValidationError: If the payload does not match the snapshot schema.
    """
    model = _PlacementSnapshotModel.model_validate(payload)
    return PlacementSnapshot(
        homes=tuple(_to_domain_home(home) for home in model.homes),
        referrals=tuple(_to_domain_referral(referral) for referral in model.referrals),
        threads=tuple(
            Thread(id=thread.id, referral_id=thread.referral_id, home_id=thread.home_id)
            for thread in model.threads
        ),
    )


def load_placement_snapshot(*, path: Path, fs: FileSystem) -> PlacementSnapshot:
    """Load and validate a placement snapshot from JSON."""
    if not fs.exists(path):
        raise SnapshotFileNotFoundError(str(path))

    payload = fs.read_json(path)
    try:
        return parse_placement_snapshot(payload)
    except ValidationError as exc:
        raise SnapshotValidationError(str(path), format_validation_error(exc)) from exc
