"""Tests for domain models."""

from dataclasses import FrozenInstanceError

import pytest
from pydantic import ValidationError

from nyala_presale.domain.errors import InvalidTargetTime, PresaleError, StorageUnavailable
from nyala_presale.domain.models import (
    CountdownPhase,
    PersistedShortlist,
    ReservationCountdownState,
    ShortlistState,
    ShortlistStorageReport,
    Unit,
    WarningLevel,
    WarningThresholds,
)


def test_unit_creation() -> None:
    """Given unit data, when creating a Unit, then all fields are set correctly."""
    unit = Unit(
        id="unit-1",
        code="A-101",
        unit_type="1-bed",
        floor=1,
        area_sqm=45,
        orientation="north",
        price_usd=359_000,
    )

    assert unit.code == "A-101"
    assert unit.floor == 1
    assert unit.price_usd == 359_000
    assert unit.status == "available"


def test_shortlist_state_defaults_to_empty() -> None:
    """Given no arguments, when creating a ShortlistState, then it is empty."""
    state = ShortlistState()

    assert state.count == 0
    assert state.contains("unit-1") is False
    assert state.items == ()


def test_shortlist_state_is_immutable() -> None:
    """Given a snapshot, when assigning a field, then it is rejected."""
    state = ShortlistState(unit_ids=frozenset({"u1"}), ordered_ids=("u1",))

    with pytest.raises(FrozenInstanceError):
        state.unit_ids = frozenset()  # type: ignore[misc]


def test_reservation_state_carries_level_and_display() -> None:
    """Given reservation data, when creating the state, then level and display are kept."""
    state = ReservationCountdownState(
        target_instant_ms=1000,
        server_offset_ms=0,
        remaining_ms=65_000,
        days=0,
        hours=0,
        minutes=1,
        seconds=5,
        is_expired=False,
        warning_level=WarningLevel.DANGER,
        formatted="00:01:05",
    )

    assert state.warning_level == "danger"
    assert state.formatted == "00:01:05"
    assert state.is_target_invalid is False


def test_default_thresholds() -> None:
    """Given no arguments, when creating WarningThresholds, then 15 and 5 minutes apply."""
    thresholds = WarningThresholds()

    assert thresholds.warning_below_ms == 900_000
    assert thresholds.danger_below_ms == 300_000


def test_persisted_shortlist_rejects_mutation() -> None:
    """Given a persisted shortlist, when assigning, then pydantic rejects it."""
    persisted = PersistedShortlist(unit_ids=("u1",))

    with pytest.raises(ValidationError):
        persisted.unit_ids = ()  # type: ignore[misc]


def test_storage_report_defaults_to_healthy() -> None:
    """Given no arguments, when creating a report, then it is not degraded."""
    assert ShortlistStorageReport() == ShortlistStorageReport(is_degraded=False, errors=())


def test_phase_values() -> None:
    """Given the phase enum, then it exposes the three lifecycle phases."""
    assert [p.value for p in CountdownPhase] == ["active", "expired", "cancelled"]


def test_errors_share_base_class() -> None:
    """Given core errors, then they all derive from PresaleError with readable messages."""
    invalid = InvalidTargetTime("soon", "not ISO 8601")
    unavailable = StorageUnavailable("save", OSError("quota exceeded"))

    assert isinstance(invalid, PresaleError)
    assert isinstance(unavailable, PresaleError)
    assert "not ISO 8601" in str(invalid)
    assert str(unavailable) == "Shortlist storage unavailable during save: quota exceeded"
