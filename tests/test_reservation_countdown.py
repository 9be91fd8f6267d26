"""Tests for the reservation countdown: urgency levels, display string, single expiry."""

import pytest
from fakes import START_MS, FakeClock
from pydantic import ValidationError

from nyala_presale.application.services.countdown_engine import (
    ReservationCountdownEngine,
    classify_warning_level,
    format_hms,
)
from nyala_presale.domain.models import (
    MS_PER_DAY,
    MS_PER_HOUR,
    ReservationCountdownState,
    WarningLevel,
    WarningThresholds,
)

THRESHOLDS = WarningThresholds(warning_below_ms=900_000, danger_below_ms=300_000)


class TestWarningThresholds:
    """Tests for threshold configuration."""

    def test_when_danger_not_below_warning_then_validation_error(self) -> None:
        """Given danger >= warning, when building thresholds, then validation fails."""
        with pytest.raises(ValidationError, match="danger_below_ms must be lower"):
            WarningThresholds(warning_below_ms=300_000, danger_below_ms=300_000)

    def test_when_threshold_not_positive_then_validation_error(self) -> None:
        """Given a zero threshold, when building thresholds, then validation fails."""
        with pytest.raises(ValidationError):
            WarningThresholds(warning_below_ms=900_000, danger_below_ms=0)

    def test_thresholds_are_frozen(self) -> None:
        """Given thresholds, when assigning a field, then it is rejected."""
        with pytest.raises(ValidationError):
            THRESHOLDS.danger_below_ms = 1  # type: ignore[misc]


class TestClassifyWarningLevel:
    """Tests for urgency classification."""

    @pytest.mark.parametrize(
        ("remaining_ms", "expected"),
        [
            (200_000, WarningLevel.DANGER),
            (600_000, WarningLevel.WARNING),
            (1_000_000, WarningLevel.NORMAL),
            (0, WarningLevel.DANGER),
            (299_999, WarningLevel.DANGER),
            (300_000, WarningLevel.WARNING),
            (899_999, WarningLevel.WARNING),
            (900_000, WarningLevel.NORMAL),
        ],
    )
    def test_levels_follow_configured_thresholds(
        self, remaining_ms: int, expected: WarningLevel
    ) -> None:
        """Given danger<300000 and warning<900000, when classifying, then level matches."""
        assert classify_warning_level(remaining_ms, THRESHOLDS) is expected

    def test_when_thresholds_change_then_classification_changes(self) -> None:
        """Given different thresholds, when classifying the same time, then level differs."""
        tight = WarningThresholds(warning_below_ms=120_000, danger_below_ms=30_000)

        assert classify_warning_level(200_000, tight) is WarningLevel.NORMAL
        assert classify_warning_level(200_000, THRESHOLDS) is WarningLevel.DANGER


class TestFormatHms:
    """Tests for the fixed-width display string."""

    @pytest.mark.parametrize(
        ("remaining_ms", "expected"),
        [
            (0, "00:00:00"),
            (-1, "00:00:00"),
            (999, "00:00:00"),
            (65_000, "00:01:05"),
            (9 * MS_PER_HOUR + 59 * 60_000 + 59_000, "09:59:59"),
            (MS_PER_DAY + MS_PER_HOUR, "25:00:00"),
        ],
    )
    def test_format(self, remaining_ms: int, expected: str) -> None:
        """Given remaining time, when formatting, then renders zero-padded HH:MM:SS."""
        assert format_hms(remaining_ms) == expected


class TestReservationCountdownEngine:
    """Tests for the reservation engine."""

    @pytest.mark.parametrize(
        ("remaining_ms", "expected"),
        [
            (200_000, WarningLevel.DANGER),
            (600_000, WarningLevel.WARNING),
            (1_000_000, WarningLevel.NORMAL),
        ],
    )
    def test_when_remaining_given_then_state_has_level(
        self, clock: FakeClock, remaining_ms: int, expected: WarningLevel
    ) -> None:
        """Given a remaining time, when computing, then the state carries the warning level."""
        engine = ReservationCountdownEngine(
            START_MS + remaining_ms, thresholds=THRESHOLDS, clock=clock
        )

        assert isinstance(engine.state, ReservationCountdownState)
        assert engine.state.warning_level is expected

    def test_when_counting_down_then_formatted_string_updates(self, clock: FakeClock) -> None:
        """Given a 2 minute hold, when ticking, then the formatted string follows."""
        engine = ReservationCountdownEngine(START_MS + 120_000, thresholds=THRESHOLDS, clock=clock)

        assert engine.tick().formatted == "00:02:00"
        clock.advance(61_000)
        assert engine.tick().formatted == "00:00:59"

    def test_when_crossing_zones_then_warning_and_danger_fire_once_each(
        self, clock: FakeClock
    ) -> None:
        """Given a hold starting in the normal zone, when ticking to zero, then each callback fires once."""
        events: list[str] = []
        engine = ReservationCountdownEngine(
            START_MS + 1_000_000,
            thresholds=THRESHOLDS,
            clock=clock,
            on_warning=lambda: events.append("warning"),
            on_danger=lambda: events.append("danger"),
            on_expire=lambda: events.append("expire"),
        )

        engine.tick()
        while not engine.is_done:
            clock.advance(10_000)
            engine.tick()

        assert events == ["warning", "danger", "expire"]
        assert engine.expire_count == 1
        assert engine.state.formatted == "00:00:00"
        assert engine.state.warning_level is WarningLevel.DANGER

    def test_when_starting_in_danger_then_warning_never_fires(self, clock: FakeClock) -> None:
        """Given a hold already in the danger zone, when ticking, then only danger fires."""
        events: list[str] = []
        engine = ReservationCountdownEngine(
            START_MS + 100_000,
            thresholds=THRESHOLDS,
            clock=clock,
            on_warning=lambda: events.append("warning"),
            on_danger=lambda: events.append("danger"),
        )

        for _ in range(5):
            engine.tick()
            clock.advance(1000)

        assert events == ["danger"]

    def test_when_state_read_many_times_per_tick_then_expire_fires_once(
        self, clock: FakeClock
    ) -> None:
        """Given an expired reservation, when state is read repeatedly and ticked, then expire fires once."""
        calls: list[str] = []
        engine = ReservationCountdownEngine(
            START_MS + 1000, thresholds=THRESHOLDS, clock=clock, on_expire=lambda: calls.append("x")
        )
        clock.advance(1000)

        for _ in range(3):
            engine.tick()
            for _ in range(5):
                assert engine.state.is_expired is True

        assert calls == ["x"]

    def test_when_server_ahead_then_expires_earlier(self, clock: FakeClock) -> None:
        """Given a server 30s ahead, when 30s of local time remain, then already expired."""
        engine = ReservationCountdownEngine(
            START_MS + 30_000, thresholds=THRESHOLDS, server_offset_ms=30_000, clock=clock
        )

        assert engine.tick().is_expired is True

    def test_when_target_invalid_then_expired_state_with_zero_display(
        self, clock: FakeClock
    ) -> None:
        """Given an invalid expiry, when constructed, then the state is expired and reads 00:00:00."""
        engine = ReservationCountdownEngine("???", clock=clock)

        assert engine.state.is_expired is True
        assert engine.state.is_target_invalid is True
        assert engine.state.formatted == "00:00:00"

    def test_when_no_thresholds_then_defaults_used(self, clock: FakeClock) -> None:
        """Given no thresholds, when constructed, then the default thresholds apply."""
        engine = ReservationCountdownEngine(START_MS + 600_000, clock=clock)

        assert engine.thresholds == WarningThresholds()
        assert engine.state.warning_level is WarningLevel.WARNING
