"""Home matching: hard eligibility filters plus soft capability scoring.

Usage example:
    from care_placement_matching.domain.matching import compute_matches

    matches = compute_matches(referral, homes, {"oakwood": "thread-1"})
    best = matches[0]
    assert best.eligible or all(not m.eligible for m in matches)

Every home yields exactly one ``HomeMatch``; ineligible homes are kept (with
a score of zero) so callers can show why a home was ruled out.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .match_reasons import SCORED_NEEDS, MatchReason, ScoredNeed, failed, passed, warned
from .placement import Home, HomeCapabilities, ReferralSnapshot, ThreadIndex

# Scored need -> capability that meets it.
NEED_CAPABILITIES: MappingProxyType[ScoredNeed, str] = MappingProxyType(
    {
        "diabetes": "diabetes_trained",
        "trauma": "trauma_informed",
        "adhd": "adhd_support",
        "specialist_staff": "specialist_staff",
        "mental_health": "mental_health",
    }
)

DEFAULT_BASE_SCORE = 50
DEFAULT_LOCATION_BONUS = 10
DEFAULT_MIN_SCORE = 0
DEFAULT_MAX_SCORE = 100


@dataclass(frozen=True)
class NeedAdjustment:
    """Score change when a flagged need is met or unmet by a home."""

    met: int
    unmet: int


def _default_need_adjustments() -> MappingProxyType[ScoredNeed, NeedAdjustment]:
    return MappingProxyType(
        {
            "diabetes": NeedAdjustment(met=15, unmet=-10),
            "trauma": NeedAdjustment(met=15, unmet=-10),
            "adhd": NeedAdjustment(met=15, unmet=-10),
            "specialist_staff": NeedAdjustment(met=10, unmet=-5),
            "mental_health": NeedAdjustment(met=10, unmet=-5),
        }
    )


@dataclass(frozen=True)
class MatchingWeights:
    """Numbers driving the soft score."""

    base_score: int = DEFAULT_BASE_SCORE
    need_adjustments: MappingProxyType[ScoredNeed, NeedAdjustment] = field(
        default_factory=_default_need_adjustments
    )
    location_bonus: int = DEFAULT_LOCATION_BONUS
    min_score: int = DEFAULT_MIN_SCORE
    max_score: int = DEFAULT_MAX_SCORE


DEFAULT_WEIGHTS = MatchingWeights()


@dataclass(frozen=True)
class HomeMatch:
    """Match outcome for one home against one referral."""

    home_id: str
    home_name: str
    location: str
    free_beds: int
    score: int  # 0-100, always 0 when ineligible
    eligible: bool
    reasons: tuple[MatchReason, ...]
    existing_thread_id: str | None = None

    @property
    def already_contacted(self) -> bool:
        """Whether a negotiation thread already exists for this home."""
        return self.existing_thread_id is not None

    @property
    def fail_reasons(self) -> tuple[MatchReason, ...]:
        return tuple(reason for reason in self.reasons if reason.level == "fail")

    @property
    def warn_reasons(self) -> tuple[MatchReason, ...]:
        return tuple(reason for reason in self.reasons if reason.level == "warn")


def _need_is_flagged(referral: ReferralSnapshot, need: ScoredNeed) -> bool:
    return bool(getattr(referral.needs, need))


def _capability_offered(capabilities: HomeCapabilities, need: ScoredNeed) -> bool:
    return bool(getattr(capabilities, NEED_CAPABILITIES[need]))


def _hard_filter_reasons(referral: ReferralSnapshot, home: Home) -> list[MatchReason]:
    profile = referral.child_profile
    constraints = home.constraints
    reasons: list[MatchReason] = []

    if home.free_beds <= 0:
        reasons.append(failed("NO_BEDS"))
    else:
        reasons.append(passed("BEDS_AVAILABLE", free_beds=home.free_beds))

    if profile.gender not in constraints.gender_allowed:
        reasons.append(failed("GENDER_MISMATCH", gender=profile.gender, age=profile.age))
    else:
        reasons.append(passed("GENDER_ACCEPTED", gender=profile.gender))

    bounds = {"age": profile.age, "min_age": constraints.min_age, "max_age": constraints.max_age}
    if profile.age < constraints.min_age or profile.age > constraints.max_age:
        reasons.append(failed("AGE_OUT_OF_RANGE", **bounds))
    else:
        reasons.append(passed("AGE_IN_RANGE", **bounds))

    return reasons


def evaluate_home(
    referral: ReferralSnapshot,
    home: Home,
    thread_index: ThreadIndex,
    weights: MatchingWeights = DEFAULT_WEIGHTS,
) -> HomeMatch:
    """Evaluate one home against a referral.

    Hard filters (beds, gender, age, DoL registration) decide eligibility and
    never move the score. Soft scoring runs whatever the eligibility outcome so
    the reasons stay informative; the reported score of an ineligible home is
    then zero.

    Args:
        referral: Child profile, needs and optional legal status.
        home: Candidate home.
        thread_index: Home id to existing thread id for this referral.
        weights: Soft-score numbers (defaults to ``DEFAULT_WEIGHTS``).

    Returns:
        The home's match with its reasons in generation order.
    """
    reasons = _hard_filter_reasons(referral, home)
    eligible = all(reason.level != "fail" for reason in reasons)
    score = weights.base_score

    for need in SCORED_NEEDS:
        if not _need_is_flagged(referral, need):
            continue
        adjustment = weights.need_adjustments[need]
        if _capability_offered(home.capabilities, need):
            score += adjustment.met
            reasons.append(MatchReason(code="NEED_MET", level="pass", need=need))
        else:
            score += adjustment.unmet
            reasons.append(MatchReason(code="NEED_UNMET", level="warn", need=need))

    if home.location.lower() == referral.child_profile.location.lower():
        score += weights.location_bonus
        reasons.append(passed("SAME_LOCATION", location=home.location))

    if referral.dol_applies:
        # Only an explicit False fails; an unrecorded registration passes silently.
        if home.is_registered is False:
            eligible = False
            reasons.append(failed("DOL_UNREGISTERED"))
        elif home.is_registered:
            reasons.append(passed("DOL_REGISTERED"))
        reasons.append(warned("DOL_VERIFY_RESTRICTIONS"))

    score = max(weights.min_score, min(weights.max_score, score))

    return HomeMatch(
        home_id=home.id,
        home_name=home.name,
        location=home.location,
        free_beds=home.free_beds,
        score=score if eligible else 0,
        eligible=eligible,
        reasons=tuple(reasons),
        existing_thread_id=thread_index.get(home.id),
    )


def compute_matches(
    referral: ReferralSnapshot,
    homes: Sequence[Home],
    thread_index: ThreadIndex,
    weights: MatchingWeights | None = None,
) -> list[HomeMatch]:
    """Rank every home for a referral: eligible first, then by score.

    The sort is stable, so homes with equal rank keep their input order.
    """
    active_weights = weights or DEFAULT_WEIGHTS
    results = [evaluate_home(referral, home, thread_index, active_weights) for home in homes]
    return sorted(results, key=lambda match: (not match.eligible, -match.score))


def eligible_uncontacted(matches: Iterable[HomeMatch]) -> list[HomeMatch]:
    """Return eligible homes with no existing thread, keeping rank order."""
    return [match for match in matches if match.eligible and not match.already_contacted]
