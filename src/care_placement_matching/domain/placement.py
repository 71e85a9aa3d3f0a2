"""Placement domain records consumed by the home-matching engine.

Usage example:
    from care_placement_matching.domain.placement import (
        ChildNeeds,
        ChildProfile,
        Home,
        HomeCapabilities,
        HomeConstraints,
        ReferralSnapshot,
    )

    referral = ReferralSnapshot(
        child_profile=ChildProfile(
            name="Lily Harper",
            age=11,
            gender="female",
            location="Bristol",
            local_authority="Bristol City Council",
        ),
        needs=ChildNeeds(diabetes=True, trauma=True),
    )
    home = Home(
        id="oakwood",
        name="Oakwood House",
        location="Bristol",
        free_beds=2,
        constraints=HomeConstraints(min_age=8, max_age=14, gender_allowed=("female",)),
        capabilities=HomeCapabilities(diabetes_trained=True, trauma_informed=True),
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from datetime import date
from typing import Literal

Gender = Literal["male", "female"]
LegalBasis = Literal[
    "NONE",
    "COURT_OF_PROTECTION",
    "HIGH_COURT_INHERENT",
    "SECURE_ACCOMMODATION_S25",
    "MHA",
    "OTHER",
]
Priority = Literal["EMERGENCY", "HIGH", "NORMAL"]
ReferralStatus = Literal[
    "NEW",
    "TRIAGED",
    "OUTREACH",
    "AWAITING_RESPONSE",
    "DECISION",
    "PLACED",
    "CLOSED",
]

# home id -> existing negotiation thread id for one referral
ThreadIndex = Mapping[str, str]


@dataclass(frozen=True)
class ChildProfile:
    """Who the child is, as recorded on the referral."""

    name: str
    age: int
    gender: Gender
    location: str
    local_authority: str


@dataclass(frozen=True)
class ChildNeeds:
    """Independent care-need flags recorded on a referral."""

    adhd: bool = False
    diabetes: bool = False
    trauma: bool = False
    specialist_staff: bool = False
    mental_health: bool = False
    self_harm: bool = False
    violence: bool = False
    absconding: bool = False

    def flagged(self) -> tuple[str, ...]:
        """Return the names of the flags that are set, in declaration order."""
        return tuple(field.name for field in fields(self) if getattr(self, field.name))


@dataclass(frozen=True)
class LegalStatus:
    """Deprivation of Liberty details; ignored unless ``applicable``."""

    applicable: bool
    legal_basis: LegalBasis = "NONE"
    order_ref: str | None = None
    court: str | None = None
    date_made: date | None = None
    expiry_date: date | None = None
    review_due: date | None = None
    authorised_restrictions: tuple[str, ...] = ()
    placement_registered: bool | None = None  # None: not yet confirmed
    notes: str | None = None


@dataclass(frozen=True)
class HomeConstraints:
    """Who a home can accept. Age bounds are inclusive."""

    min_age: int
    max_age: int
    gender_allowed: tuple[Gender, ...]
    notes: str | None = None


@dataclass(frozen=True)
class HomeCapabilities:
    """Staff capabilities a home offers."""

    diabetes_trained: bool = False
    trauma_informed: bool = False
    adhd_support: bool = False
    specialist_staff: bool = False
    mental_health: bool = False


@dataclass(frozen=True)
class Home:
    """A candidate care home."""

    id: str
    name: str
    location: str
    free_beds: int
    constraints: HomeConstraints
    capabilities: HomeCapabilities
    is_registered: bool | None = None  # None: registration not recorded


@dataclass(frozen=True)
class ReferralSnapshot:
    """The parts of a referral the matcher reads, frozen at match time."""

    child_profile: ChildProfile
    needs: ChildNeeds
    legal_status: LegalStatus | None = None

    @property
    def dol_applies(self) -> bool:
        """Whether a Deprivation of Liberty order applies to this placement."""
        return self.legal_status is not None and self.legal_status.applicable


@dataclass(frozen=True)
class Referral:
    """A placement case as held by the referral provider."""

    id: str
    external_case_ref: str
    priority: Priority
    status: ReferralStatus
    triage_score: int
    child_profile: ChildProfile
    needs: ChildNeeds
    legal_status: LegalStatus | None = None
    missing_info: tuple[str, ...] = ()

    def snapshot(self) -> ReferralSnapshot:
        """Return the matcher's view of this referral."""
        return ReferralSnapshot(
            child_profile=self.child_profile,
            needs=self.needs,
            legal_status=self.legal_status,
        )


@dataclass(frozen=True)
class Thread:
    """A negotiation thread between a coordinator and one home."""

    id: str
    referral_id: str
    home_id: str
