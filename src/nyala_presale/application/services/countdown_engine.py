"""Countdown engines for offer and reservation timers.

An engine is a scheduled task: every ``tick()`` computes the remaining time
against a server-corrected clock and either emits a new state or, on the first
tick that reaches zero, moves to the terminal ``EXPIRED`` phase and fires
``on_expire``. Ticks in a terminal phase do nothing, so expiration fires at
most once per engine.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from nyala_presale.domain.errors import DuplicateExpireInvocation, InvalidTargetTime
from nyala_presale.domain.models import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    CountdownPhase,
    CountdownState,
    ReservationCountdownState,
    WarningLevel,
    WarningThresholds,
)

if TYPE_CHECKING:
    from nyala_presale.domain.ports import Clock

logger = logging.getLogger(__name__)

TargetInstant = datetime | str | int | float

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _system_now_ms() -> int:
    return time.time_ns() // 1_000_000


def parse_instant_ms(value: TargetInstant) -> int:
    """Normalize a target instant to epoch milliseconds.

    Accepts an aware or naive ``datetime`` (naive is treated as UTC), an
    ISO 8601 string, or epoch milliseconds.

    Raises:
        InvalidTargetTime: If the value cannot be interpreted as an instant.
    """
    if isinstance(value, bool):
        raise InvalidTargetTime(value, "booleans are not instants")

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return (value - _EPOCH) // timedelta(milliseconds=1)

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidTargetTime(value, "empty string")
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as e:
            raise InvalidTargetTime(value, "not an ISO 8601 timestamp") from e
        return parse_instant_ms(parsed)

    if isinstance(value, int | float):
        if not math.isfinite(value):
            raise InvalidTargetTime(value, "not a finite number")
        return int(value)

    raise InvalidTargetTime(value, f"unsupported type {type(value).__name__}")


def compute_server_offset_ms(server_now: TargetInstant, local_now_ms: int | None = None) -> int:
    """Compute ``server_now - local_now`` in milliseconds.

    An unparseable server timestamp yields an offset of 0, so the countdown
    falls back to the local clock.
    """
    if local_now_ms is None:
        local_now_ms = _system_now_ms()
    try:
        return parse_instant_ms(server_now) - local_now_ms
    except InvalidTargetTime as e:
        logger.warning(f"Ignoring server time, falling back to local clock: {e}")
        return 0


def decompose_remaining(remaining_ms: int) -> tuple[int, int, int, int]:
    """Split milliseconds into (days, hours, minutes, seconds).

    Each unit is taken modulo the unit above it; the sub-second remainder is
    dropped. Negative input is treated as zero.
    """
    remaining = max(0, remaining_ms)
    days = remaining // MS_PER_DAY
    hours = (remaining % MS_PER_DAY) // MS_PER_HOUR
    minutes = (remaining % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (remaining % MS_PER_MINUTE) // MS_PER_SECOND
    return days, hours, minutes, seconds


def format_hms(remaining_ms: int) -> str:
    """Format milliseconds as zero-padded ``HH:MM:SS`` with days folded into hours."""
    total_seconds = max(0, remaining_ms) // MS_PER_SECOND
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def classify_warning_level(remaining_ms: int, thresholds: WarningThresholds) -> WarningLevel:
    """Classify remaining time against the configured thresholds."""
    if remaining_ms < thresholds.danger_below_ms:
        return WarningLevel.DANGER
    if remaining_ms < thresholds.warning_below_ms:
        return WarningLevel.WARNING
    return WarningLevel.NORMAL


class CountdownEngine:
    """Countdown to a target instant, for offers and promotions."""

    def __init__(
        self,
        target_instant: TargetInstant,
        *,
        server_offset_ms: int = 0,
        on_expire: Callable[[], None] | None = None,
        on_tick: Callable[[CountdownState], None] | None = None,
        on_error: Callable[[InvalidTargetTime], None] | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the engine and compute its initial state.

        Args:
            target_instant: When the countdown reaches zero. May lie in the past.
            server_offset_ms: Correction added to the local clock to approximate server time.
            on_expire: Called once, at the tick where the countdown first reaches zero.
            on_tick: Called with every state emitted by ``tick()``.
            on_error: Called if the target instant is invalid.
            clock: Local clock; defaults to the system wall clock.
        """
        try:
            self.server_offset_ms = int(server_offset_ms)
        except (TypeError, ValueError, OverflowError):
            logger.warning(f"Ignoring invalid server offset {server_offset_ms!r}, using 0")
            self.server_offset_ms = 0
        self._now_ms = clock.now_ms if clock is not None else _system_now_ms
        self._on_expire = on_expire
        self._on_tick = on_tick
        self._phase = CountdownPhase.ACTIVE
        self._expire_count = 0
        self.target_error: InvalidTargetTime | None = None

        try:
            self.target_instant_ms: int | None = parse_instant_ms(target_instant)
        except InvalidTargetTime as e:
            self.target_instant_ms = None
            self.target_error = e
            logger.warning(f"Countdown treated as expired: {e}")
            if on_error is not None:
                try:
                    on_error(e)
                except Exception:
                    logger.exception("Error in countdown error hook")

        self._state = self._compute()

    @property
    def state(self) -> CountdownState:
        """The most recently computed state."""
        return self._state

    @property
    def phase(self) -> CountdownPhase:
        """Current lifecycle phase."""
        return self._phase

    @property
    def is_done(self) -> bool:
        """Whether the engine reached a terminal phase."""
        return self._phase is not CountdownPhase.ACTIVE

    @property
    def expire_count(self) -> int:
        """How many times ``on_expire`` was invoked (0 or 1)."""
        return self._expire_count

    def tick(self) -> CountdownState:
        """Recompute the state and emit it, expiring on the first zero.

        Returns:
            The emitted state, or the last state if the engine is done.
        """
        if self._phase is not CountdownPhase.ACTIVE:
            return self._state

        state = self._compute()
        self._state = state
        if state.is_expired:
            self._phase = CountdownPhase.EXPIRED

        self._after_compute(state)
        if self._on_tick is not None:
            try:
                self._on_tick(state)
            except Exception:
                logger.exception("Error in countdown tick callback")

        if state.is_expired:
            self._fire_expire()
        return state

    def cancel(self) -> None:
        """Deactivate the countdown without firing ``on_expire``."""
        if self._phase is CountdownPhase.ACTIVE:
            self._phase = CountdownPhase.CANCELLED
            logger.debug("Countdown cancelled")

    def _fire_expire(self) -> None:
        if self._expire_count:
            raise DuplicateExpireInvocation("Countdown already expired")
        self._expire_count += 1
        logger.info("Countdown expired")
        if self._on_expire is not None:
            try:
                self._on_expire()
            except Exception:
                logger.exception("Error in countdown expire callback")

    def _after_compute(self, state: CountdownState) -> None:
        """Hook for variants that react to each freshly computed state."""

    def _remaining_ms(self) -> int:
        if self.target_instant_ms is None:
            return 0
        effective_now = self._now_ms() + self.server_offset_ms
        return max(0, self.target_instant_ms - effective_now)

    def _compute(self) -> CountdownState:
        remaining = self._remaining_ms()
        days, hours, minutes, seconds = decompose_remaining(remaining)
        return CountdownState(
            target_instant_ms=self.target_instant_ms,
            server_offset_ms=self.server_offset_ms,
            remaining_ms=remaining,
            days=days,
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            is_expired=remaining <= 0,
            is_target_invalid=self.target_instant_ms is None,
        )


class ReservationCountdownEngine(CountdownEngine):
    """Countdown for a held unit, with urgency levels and an ``HH:MM:SS`` display.

    ``on_warning`` and ``on_danger`` each fire once, at the first tick that
    enters their zone. The expiring tick fires only ``on_expire``.
    """

    def __init__(
        self,
        target_instant: TargetInstant,
        *,
        thresholds: WarningThresholds | None = None,
        server_offset_ms: int = 0,
        on_expire: Callable[[], None] | None = None,
        on_warning: Callable[[], None] | None = None,
        on_danger: Callable[[], None] | None = None,
        on_tick: Callable[[CountdownState], None] | None = None,
        on_error: Callable[[InvalidTargetTime], None] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.thresholds = thresholds or WarningThresholds()
        self._on_warning = on_warning
        self._on_danger = on_danger
        self._warning_fired = False
        self._danger_fired = False
        super().__init__(
            target_instant,
            server_offset_ms=server_offset_ms,
            on_expire=on_expire,
            on_tick=on_tick,
            on_error=on_error,
            clock=clock,
        )

    @property
    def state(self) -> ReservationCountdownState:
        """The most recently computed state."""
        return self._state  # type: ignore[return-value]

    def tick(self) -> ReservationCountdownState:
        """Recompute the state and emit it, expiring on the first zero."""
        return super().tick()  # type: ignore[return-value]

    def _after_compute(self, state: CountdownState) -> None:
        if state.is_expired or not isinstance(state, ReservationCountdownState):
            return
        if state.warning_level is WarningLevel.DANGER and not self._danger_fired:
            self._danger_fired = True
            logger.info(f"Reservation entered danger zone ({state.formatted} left)")
            self._fire_once(self._on_danger, "danger")
        elif state.warning_level is WarningLevel.WARNING and not self._warning_fired:
            self._warning_fired = True
            logger.info(f"Reservation entered warning zone ({state.formatted} left)")
            self._fire_once(self._on_warning, "warning")

    @staticmethod
    def _fire_once(callback: Callable[[], None] | None, name: str) -> None:
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception(f"Error in countdown {name} callback")

    def _compute(self) -> ReservationCountdownState:
        base = super()._compute()
        return ReservationCountdownState(
            target_instant_ms=base.target_instant_ms,
            server_offset_ms=base.server_offset_ms,
            remaining_ms=base.remaining_ms,
            days=base.days,
            hours=base.hours,
            minutes=base.minutes,
            seconds=base.seconds,
            is_expired=base.is_expired,
            is_target_invalid=base.is_target_invalid,
            warning_level=classify_warning_level(base.remaining_ms, self.thresholds),
            formatted=format_hms(base.remaining_ms),
        )
