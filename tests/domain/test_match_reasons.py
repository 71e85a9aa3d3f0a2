"""Tests for match reason records."""

from care_placement_matching.domain.match_reasons import (
    SCORED_NEEDS,
    MatchReason,
    failed,
    passed,
    warned,
)


def test_builders_set_level_and_stringify_detail() -> None:
    reason = failed("AGE_OUT_OF_RANGE", age=16, min_age=5, max_age=12)

    assert reason.level == "fail"
    assert reason.detail == (("age", "16"), ("min_age", "5"), ("max_age", "12"))
    assert passed("NO_BEDS").level == "pass"
    assert warned("DOL_VERIFY_RESTRICTIONS").level == "warn"


def test_key_is_qualified_by_need() -> None:
    assert MatchReason(code="NEED_UNMET", level="warn", need="adhd").key == "NEED_UNMET:adhd"
    assert passed("SAME_LOCATION", location="Bath").key == "SAME_LOCATION"


def test_detail_value_defaults_to_empty_string() -> None:
    reason = passed("BEDS_AVAILABLE", free_beds=2)

    assert reason.detail_value("free_beds") == "2"
    assert reason.detail_value("location") == ""


def test_scored_needs_order() -> None:
    assert SCORED_NEEDS == ("diabetes", "trauma", "adhd", "specialist_staff", "mental_health")
