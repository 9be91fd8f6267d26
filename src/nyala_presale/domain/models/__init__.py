"""Domain models for the reservation core."""

from nyala_presale.domain.models.countdown_state import (
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
from nyala_presale.domain.models.shortlist_state import (
    PersistedShortlist,
    ShortlistState,
    ShortlistStorageReport,
)
from nyala_presale.domain.models.unit import Unit

__all__ = [
    "MS_PER_DAY",
    "MS_PER_HOUR",
    "MS_PER_MINUTE",
    "MS_PER_SECOND",
    "CountdownPhase",
    "CountdownState",
    "PersistedShortlist",
    "ReservationCountdownState",
    "ShortlistState",
    "ShortlistStorageReport",
    "Unit",
    "WarningLevel",
    "WarningThresholds",
]
