"""Tests for placement snapshot loading and validation."""

from __future__ import annotations

import copy
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from care_placement_matching.application.placement_snapshot import (
    PlacementSnapshot,
    load_placement_snapshot,
    parse_placement_snapshot,
)
from care_placement_matching.exceptions import SnapshotFileNotFoundError, SnapshotValidationError
from care_placement_matching.protocols import HomeProvider, ReferralProvider, ThreadIndexProvider
from tests.fakes import InMemoryFileSystem

SNAPSHOT_PATH = Path("data/placements/snapshot.json")


def test_parse_converts_payload_to_domain_records(snapshot_payload: dict[str, object]) -> None:
    snapshot = parse_placement_snapshot(snapshot_payload)

    assert [home.id for home in snapshot.list_homes()] == [
        "oakwood",
        "riverside",
        "maple",
        "birchwood",
    ]
    riverside = snapshot.list_homes()[1]
    assert riverside.is_registered is False
    assert riverside.capabilities.adhd_support is True
    assert riverside.capabilities.diabetes_trained is False
    assert riverside.constraints.gender_allowed == ("male", "female")
    assert snapshot.list_homes()[0].is_registered is None


def test_referral_legal_status_is_converted(snapshot_payload: dict[str, object]) -> None:
    snapshot = parse_placement_snapshot(snapshot_payload)

    referral = snapshot.get_referral("r1")

    assert referral is not None
    assert referral.priority == "EMERGENCY"
    assert referral.child_profile.name == "Lily Harper"
    assert referral.needs.self_harm is True
    assert referral.legal_status is not None
    assert referral.legal_status.review_due == date(2026, 2, 24)
    assert referral.legal_status.authorised_restrictions == (
        "Locked doors overnight (22:00-07:00)",
    )
    assert referral.snapshot().dol_applies is True
    assert referral.missing_info == ("GP details pending",)


def test_referral_without_legal_status(snapshot_payload: dict[str, object]) -> None:
    referral = parse_placement_snapshot(snapshot_payload).get_referral("r3")

    assert referral is not None
    assert referral.legal_status is None
    assert referral.snapshot().dol_applies is False


def test_unknown_referral_returns_none(snapshot_payload: dict[str, object]) -> None:
    assert parse_placement_snapshot(snapshot_payload).get_referral("missing") is None


def test_thread_index_is_scoped_to_referral(snapshot_payload: dict[str, object]) -> None:
    snapshot = parse_placement_snapshot(snapshot_payload)

    assert snapshot.thread_index("r2") == {"riverside": "t1", "birchwood": "t4"}
    assert snapshot.thread_index("r4") == {"birchwood": "t2"}
    assert snapshot.thread_index("r1") == {}


def test_snapshot_satisfies_provider_protocols(snapshot_payload: dict[str, object]) -> None:
    snapshot = parse_placement_snapshot(snapshot_payload)

    assert isinstance(snapshot, ReferralProvider)
    assert isinstance(snapshot, HomeProvider)
    assert isinstance(snapshot, ThreadIndexProvider)


def test_empty_snapshot_is_valid() -> None:
    snapshot = parse_placement_snapshot({"schema_version": 1})

    assert snapshot == PlacementSnapshot()
    assert snapshot.list_homes() == ()


@pytest.mark.parametrize(
    "mutate",
    [
        lambda payload: payload.update(schema_version=2),
        lambda payload: payload.update(extra_field=True),
        lambda payload: payload["homes"][0].update(free_beds=-1),
        lambda payload: payload["homes"][0]["constraints"].update(gender_allowed=["other"]),
        lambda payload: payload["homes"][0]["capabilities"].update(pool=True),
        lambda payload: payload["referrals"][0]["child_profile"].update(age=19),
        lambda payload: payload["referrals"][0].update(triage_score=101),
        lambda payload: payload["referrals"][0].update(priority="URGENT"),
        lambda payload: payload["homes"].append(copy.deepcopy(payload["homes"][0])),
        lambda payload: payload["threads"].append(
            {"id": "t9", "referral_id": "r1", "home_id": "nowhere"}
        ),
        lambda payload: payload["threads"].append(
            {"id": "t9", "referral_id": "nobody", "home_id": "oakwood"}
        ),
    ],
)
def test_invalid_payloads_are_rejected(
    snapshot_payload: dict[str, object], mutate: Callable[[dict[str, Any]], None]
) -> None:
    payload: dict[str, Any] = copy.deepcopy(snapshot_payload)
    mutate(payload)

    with pytest.raises(ValidationError):
        parse_placement_snapshot(payload)


def test_load_reads_from_filesystem(
    in_memory_fs: InMemoryFileSystem, snapshot_payload: dict[str, object]
) -> None:
    in_memory_fs.write_json(snapshot_payload, SNAPSHOT_PATH)

    snapshot = load_placement_snapshot(path=SNAPSHOT_PATH, fs=in_memory_fs)

    assert len(snapshot.referrals) == 4
    assert len(snapshot.threads) == 3


def test_load_missing_file_raises(in_memory_fs: InMemoryFileSystem) -> None:
    with pytest.raises(SnapshotFileNotFoundError, match="PLACEMENT_SNAPSHOT_PATH"):
        load_placement_snapshot(path=SNAPSHOT_PATH, fs=in_memory_fs)


def test_load_invalid_payload_raises_with_location(
    in_memory_fs: InMemoryFileSystem, snapshot_payload: dict[str, object]
) -> None:
    payload: dict[str, Any] = copy.deepcopy(snapshot_payload)
    payload["homes"][0]["free_beds"] = -2
    in_memory_fs.write_json(payload, SNAPSHOT_PATH)

    with pytest.raises(SnapshotValidationError) as exc_info:
        load_placement_snapshot(path=SNAPSHOT_PATH, fs=in_memory_fs)

    message = str(exc_info.value)
    assert str(SNAPSHOT_PATH) in message
    assert "free_beds" in message
