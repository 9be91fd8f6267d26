"""Countdown state domain models."""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


class WarningLevel(StrEnum):
    """Urgency of a reservation countdown, ordered from calm to urgent."""

    NORMAL = "normal"
    WARNING = "warning"
    DANGER = "danger"


class CountdownPhase(StrEnum):
    """Lifecycle phase of a countdown engine.

    Both ``EXPIRED`` and ``CANCELLED`` are terminal; the only transitions are
    out of ``ACTIVE``.
    """

    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


@dataclass(frozen=True, kw_only=True)
class CountdownState:
    """Remaining time to a target instant, decomposed for display."""

    target_instant_ms: int | None
    server_offset_ms: int
    remaining_ms: int
    days: int
    hours: int
    minutes: int
    seconds: int
    is_expired: bool
    is_target_invalid: bool = False


@dataclass(frozen=True, kw_only=True)
class ReservationCountdownState(CountdownState):
    """Countdown state for a held reservation, with urgency and a display string."""

    warning_level: WarningLevel
    formatted: str


class WarningThresholds(BaseModel):
    """Millisecond thresholds separating the warning levels.

    Remaining time below ``danger_below_ms`` is ``danger``, below
    ``warning_below_ms`` is ``warning``, anything else is ``normal``.
    """

    model_config = ConfigDict(frozen=True)

    warning_below_ms: int = Field(default=15 * MS_PER_MINUTE, gt=0)
    danger_below_ms: int = Field(default=5 * MS_PER_MINUTE, gt=0)

    @model_validator(mode="after")
    def validate_ordering(self) -> "WarningThresholds":
        """Validate the danger threshold lies below the warning threshold."""
        if self.danger_below_ms >= self.warning_below_ms:
            raise ValueError(
                "danger_below_ms must be lower than warning_below_ms "
                f"(got {self.danger_below_ms} >= {self.warning_below_ms})"
            )
        return self
