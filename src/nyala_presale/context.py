"""Composition root: wires the shortlist store and countdown factories from config."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from nyala_presale.adapters.catalog import InMemoryUnitCatalog
from nyala_presale.adapters.config import AppConfig
from nyala_presale.adapters.scheduling import AsyncioTickScheduler
from nyala_presale.adapters.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueShortlistPersistence,
)
from nyala_presale.application.services import (
    CountdownEngine,
    ReservationCountdownEngine,
    ShortlistStore,
    compute_server_offset_ms,
)
from nyala_presale.application.services.countdown_engine import TargetInstant
from nyala_presale.domain.models import CountdownState, Unit
from nyala_presale.domain.ports import Clock, KeyValueStorage

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging the same way for every entry point."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@dataclass
class PresaleContext:
    """Services handed to the UI layer instead of module-level globals."""

    config: AppConfig
    shortlist: ShortlistStore
    clock: Clock | None = None

    def offer_countdown(
        self,
        target_instant: TargetInstant,
        on_expire: Callable[[], None] | None = None,
        on_tick: Callable[[CountdownState], None] | None = None,
    ) -> AsyncioTickScheduler:
        """Create a scheduled offer countdown. Call ``start()`` on the result to run it."""
        engine = CountdownEngine(
            target_instant, on_expire=on_expire, on_tick=on_tick, clock=self.clock
        )
        return AsyncioTickScheduler(engine, self.config.tick_interval_seconds, name="offer")

    def reservation_countdown(
        self,
        expires_at: TargetInstant,
        server_now: TargetInstant | None = None,
        on_expire: Callable[[], None] | None = None,
        on_warning: Callable[[], None] | None = None,
        on_danger: Callable[[], None] | None = None,
        on_tick: Callable[[CountdownState], None] | None = None,
    ) -> AsyncioTickScheduler:
        """Create a scheduled reservation countdown.

        Args:
            expires_at: When the hold on the unit ends.
            server_now: Server time reported alongside ``expires_at``; used to
                derive the clock offset. None trusts the local clock.
        """
        offset = 0
        if server_now is not None:
            local_now = self.clock.now_ms() if self.clock is not None else None
            offset = compute_server_offset_ms(server_now, local_now)
        engine = ReservationCountdownEngine(
            expires_at,
            thresholds=self.config.warning_thresholds(),
            server_offset_ms=offset,
            on_expire=on_expire,
            on_warning=on_warning,
            on_danger=on_danger,
            on_tick=on_tick,
            clock=self.clock,
        )
        return AsyncioTickScheduler(engine, self.config.tick_interval_seconds, name="reservation")


def create_storage(config: AppConfig) -> KeyValueStorage:
    """Pick the key-value storage configured for the shortlist."""
    if config.shortlist_storage_file:
        return JsonFileKeyValueStorage(config.shortlist_storage_file)
    return InMemoryKeyValueStorage()


def create_presale_context(
    config: AppConfig | None = None,
    units: Iterable[Unit] | None = None,
    clock: Clock | None = None,
) -> PresaleContext:
    """Build and initialize the services for one visitor session.

    Args:
        config: Application configuration; loaded from the environment if None.
        units: Catalog used to resolve shortlisted ids. None leaves items empty.
        clock: Local clock for countdowns; the system clock if None.
    """
    if config is None:
        config = AppConfig()
        config.load_toml_overrides()

    persistence = KeyValueShortlistPersistence(
        create_storage(config), storage_key=config.shortlist_storage_key
    )
    resolver = InMemoryUnitCatalog(units) if units is not None else None
    shortlist = ShortlistStore(
        persistence=persistence,
        resolver=resolver,
        default_base_url=config.share_base_url,
    )
    shortlist.init()

    logger.info(
        f"Presale context ready (tick: {config.countdown_tick_interval_ms}ms, "
        f"storage: {config.shortlist_storage_file or 'memory'})"
    )
    return PresaleContext(config=config, shortlist=shortlist, clock=clock)
