"""Display text and report rows for match results.

Usage example:
    from care_placement_matching.presentation import reason_text

    for reason in match.reasons:
        print(reason.level, reason_text(reason))
"""

from __future__ import annotations

from collections.abc import Sequence

from .domain.match_reasons import MatchReason, ReasonLevel, ScoredNeed
from .domain.matching import HomeMatch

_NEED_MET_TEXT: dict[ScoredNeed, str] = {
    "diabetes": "Has diabetes-trained staff",
    "trauma": "Trauma-informed care available",
    "adhd": "ADHD support programme",
    "specialist_staff": "Specialist staff on-site",
    "mental_health": "Mental health support available",
}

_NEED_UNMET_TEXT: dict[ScoredNeed, str] = {
    "diabetes": "No diabetes-trained staff",
    "trauma": "Not trauma-informed",
    "adhd": "No dedicated ADHD support",
    "specialist_staff": "No specialist staff",
    "mental_health": "Limited mental health support",
}

_LEVEL_MARKERS: dict[ReasonLevel, str] = {
    "pass": "[green]✓[/green]",
    "warn": "[yellow]![/yellow]",
    "fail": "[red]✗[/red]",
}


def _beds_text(reason: MatchReason) -> str:
    beds = reason.detail_value("free_beds")
    plural = "" if beds == "1" else "s"
    return f"{beds} bed{plural} available"


def _age_range(reason: MatchReason) -> str:
    return f"({reason.detail_value('min_age')}–{reason.detail_value('max_age')})"


def reason_text(reason: MatchReason) -> str:
    """Render the display text for a reason."""
    value = reason.detail_value
    match reason.code:
        case "BEDS_AVAILABLE":
            return _beds_text(reason)
        case "NO_BEDS":
            return "No free beds"
        case "GENDER_ACCEPTED":
            return f"Accepts {value('gender')} children"
        case "GENDER_MISMATCH":
            return f"Cannot accept {value('gender')} aged {value('age')}"
        case "AGE_IN_RANGE":
            return f"Age {value('age')} within range {_age_range(reason)}"
        case "AGE_OUT_OF_RANGE":
            return f"Age {value('age')} outside range {_age_range(reason)}"
        case "NEED_MET" if reason.need is not None:
            return _NEED_MET_TEXT[reason.need]
        case "NEED_UNMET" if reason.need is not None:
            return _NEED_UNMET_TEXT[reason.need]
        case "SAME_LOCATION":
            return f"Same area ({value('location')})"
        case "DOL_REGISTERED":
            return "Home is Ofsted-registered"
        case "DOL_UNREGISTERED":
            return "Home is unregistered (DoL placement requires Ofsted-registered home)"
        case "DOL_VERIFY_RESTRICTIONS":
            return "DoL restrictions apply, verify home can meet authorised conditions"
        case _:
            return reason.key


def reason_marker(level: ReasonLevel) -> str:
    """Return rich markup marking a reason level."""
    return _LEVEL_MARKERS[level]


def match_rows(referral_id: str, matches: Sequence[HomeMatch]) -> list[dict[str, object]]:
    """Flatten matches into one report row per home, in rank order."""
    return [
        {
            "referral_id": referral_id,
            "rank": rank,
            "home_id": match.home_id,
            "home_name": match.home_name,
            "location": match.location,
            "free_beds": match.free_beds,
            "score": match.score,
            "eligible": match.eligible,
            "existing_thread_id": match.existing_thread_id or "",
            "fail_count": len(match.fail_reasons),
            "warn_count": len(match.warn_reasons),
        }
        for rank, match in enumerate(matches, start=1)
    ]


def explain_rows(referral_id: str, matches: Sequence[HomeMatch]) -> list[dict[str, object]]:
    """Flatten matches into one report row per reason."""
    rows: list[dict[str, object]] = []
    for match in matches:
        for position, reason in enumerate(match.reasons, start=1):
            rows.append(
                {
                    "referral_id": referral_id,
                    "home_id": match.home_id,
                    "home_name": match.home_name,
                    "position": position,
                    "level": reason.level,
                    "code": reason.key,
                    "text": reason_text(reason),
                }
            )
    return rows
