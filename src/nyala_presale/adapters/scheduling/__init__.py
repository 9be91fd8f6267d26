"""Schedulers that drive countdown ticks."""

from nyala_presale.adapters.scheduling.asyncio_tick_scheduler import (
    DEFAULT_TICK_INTERVAL_SECONDS,
    AsyncioTickScheduler,
)

__all__ = ["DEFAULT_TICK_INTERVAL_SECONDS", "AsyncioTickScheduler"]
