"""Asyncio scheduler that ticks a countdown at a fixed cadence."""

from __future__ import annotations

import asyncio
import logging

from nyala_presale.domain.contracts.scheduled_task import (
    ScheduledTaskProtocol,  # noqa: TC001 - Runtime dependency: used in __init__ signature
)
from nyala_presale.domain.contracts.tick_scheduler import TickSchedulerProtocol

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_SECONDS = 1.0


class AsyncioTickScheduler(TickSchedulerProtocol):
    """Ticks one task until it is done or the scheduler is stopped.

    Each countdown owns its own scheduler; schedulers never share a task.
    """

    def __init__(
        self,
        task: ScheduledTaskProtocol,
        interval_seconds: float = DEFAULT_TICK_INTERVAL_SECONDS,
        name: str = "countdown",
    ) -> None:
        """Initialize the scheduler.

        Args:
            task: The task to tick.
            interval_seconds: Seconds between ticks.
            name: Label used in log messages.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.task = task
        self.interval_seconds = interval_seconds
        self.name = name
        self.tick_count = 0
        self._runner: asyncio.Task[None] | None = None
        self._stopped = False

    @property
    def is_running(self) -> bool:
        """Whether the tick loop is active."""
        return self._runner is not None and not self._runner.done()

    async def start(self) -> None:
        """Start the tick loop. The first tick runs immediately."""
        if self.is_running:
            logger.warning(f"Scheduler '{self.name}' already running")
            return
        if self._stopped:
            logger.warning(f"Scheduler '{self.name}' was stopped and cannot be restarted")
            return
        if self.task.is_done:
            logger.info(f"Task for scheduler '{self.name}' already done, not starting")
            return

        self._runner = asyncio.create_task(self._tick_loop())
        logger.info(f"Started scheduler '{self.name}' (interval: {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the tick loop and deactivate the task."""
        self._stopped = True
        self.task.cancel()
        if self._runner and not self._runner.done():
            self._runner.cancel()
            try:
                await self._runner
            except asyncio.CancelledError:
                logger.debug(f"Scheduler '{self.name}' cancelled")
            logger.info(f"Stopped scheduler '{self.name}' after {self.tick_count} tick(s)")

    async def wait(self) -> None:
        """Wait for the tick loop to end."""
        if self._runner is None:
            return
        try:
            await asyncio.shield(self._runner)
        except asyncio.CancelledError:
            if not self._runner.cancelled():
                raise

    async def _tick_loop(self) -> None:
        """Main tick loop."""
        try:
            while not self._stopped:
                self._tick_once()
                if self.task.is_done:
                    logger.info(f"Task for scheduler '{self.name}' done, stopping")
                    return
                await asyncio.sleep(self.interval_seconds)
        except asyncio.CancelledError:
            logger.debug(f"Tick loop for '{self.name}' cancelled")
            raise

    def _tick_once(self) -> None:
        self.tick_count += 1
        try:
            self.task.tick()
        except Exception as e:
            # Keep ticking despite errors
            logger.error(f"Error in tick of scheduler '{self.name}': {e}", exc_info=True)
