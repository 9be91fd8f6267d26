"""Domain layer - core models, ports and errors."""

from nyala_presale.domain.errors import (
    DuplicateExpireInvocation,
    InvalidTargetTime,
    PresaleError,
    StorageUnavailable,
)
from nyala_presale.domain.models import (
    CountdownPhase,
    CountdownState,
    ReservationCountdownState,
    ShortlistState,
    Unit,
    WarningLevel,
    WarningThresholds,
)
from nyala_presale.domain.ports import (
    Clock,
    KeyValueStorage,
    ShortlistPersistence,
    UnitResolver,
)

__all__ = [
    "Clock",
    "CountdownPhase",
    "CountdownState",
    "DuplicateExpireInvocation",
    "InvalidTargetTime",
    "KeyValueStorage",
    "PresaleError",
    "ReservationCountdownState",
    "ShortlistPersistence",
    "ShortlistState",
    "StorageUnavailable",
    "Unit",
    "UnitResolver",
    "WarningLevel",
    "WarningThresholds",
]
