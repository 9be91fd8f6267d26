"""Application services for reservation countdowns and the shortlist."""

from nyala_presale.application.services.countdown_engine import (
    CountdownEngine,
    ReservationCountdownEngine,
    classify_warning_level,
    compute_server_offset_ms,
    decompose_remaining,
    format_hms,
    parse_instant_ms,
)
from nyala_presale.application.services.shortlist_store import (
    ShortlistStore,
    build_share_link,
    parse_share_link,
)

__all__ = [
    "CountdownEngine",
    "ReservationCountdownEngine",
    "ShortlistStore",
    "build_share_link",
    "classify_warning_level",
    "compute_server_offset_ms",
    "decompose_remaining",
    "format_hms",
    "parse_instant_ms",
    "parse_share_link",
]
