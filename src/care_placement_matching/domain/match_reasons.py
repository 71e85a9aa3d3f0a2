"""Coded, ordered reasons explaining a home's match outcome.

Reasons carry a stable code plus the facts needed to describe them; display
text lives in ``care_placement_matching.presentation``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReasonLevel = Literal["pass", "warn", "fail"]
ReasonCode = Literal[
    "BEDS_AVAILABLE",
    "NO_BEDS",
    "GENDER_ACCEPTED",
    "GENDER_MISMATCH",
    "AGE_IN_RANGE",
    "AGE_OUT_OF_RANGE",
    "NEED_MET",
    "NEED_UNMET",
    "SAME_LOCATION",
    "DOL_REGISTERED",
    "DOL_UNREGISTERED",
    "DOL_VERIFY_RESTRICTIONS",
]
ScoredNeed = Literal["diabetes", "trauma", "adhd", "specialist_staff", "mental_health"]

# Evaluation order of the soft-scoring step.
SCORED_NEEDS: tuple[ScoredNeed, ...] = (
    "diabetes",
    "trauma",
    "adhd",
    "specialist_staff",
    "mental_health",
)


@dataclass(frozen=True)
class MatchReason:
    """One explanation line for a home's eligibility or score."""

    code: ReasonCode
    level: ReasonLevel
    need: ScoredNeed | None = None
    detail: tuple[tuple[str, str], ...] = ()

    @property
    def key(self) -> str:
        """Return the code, qualified by need for need reasons (``NEED_MET:adhd``)."""
        if self.need is None:
            return self.code
        return f"{self.code}:{self.need}"

    def detail_value(self, name: str) -> str:
        """Return a detail value by name, or an empty string."""
        for key, value in self.detail:
            if key == name:
                return value
        return ""


def passed(code: ReasonCode, **detail: object) -> MatchReason:
    """Build a ``pass`` reason."""
    return MatchReason(code=code, level="pass", detail=_detail(detail))


def warned(code: ReasonCode, **detail: object) -> MatchReason:
    """Build a ``warn`` reason."""
    return MatchReason(code=code, level="warn", detail=_detail(detail))


def failed(code: ReasonCode, **detail: object) -> MatchReason:
    """Build a ``fail`` reason."""
    return MatchReason(code=code, level="fail", detail=_detail(detail))


def _detail(values: dict[str, object]) -> tuple[tuple[str, str], ...]:
    return tuple((key, str(value)) for key, value in values.items())
