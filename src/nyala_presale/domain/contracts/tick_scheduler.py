"""Protocol for running a scheduled task at a fixed cadence."""

from typing import Protocol


class TickSchedulerProtocol(Protocol):
    """Protocol for periodic tick schedulers."""

    @property
    def is_running(self) -> bool:
        """Whether the scheduler currently drives its task."""
        ...

    async def start(self) -> None:
        """Start ticking the task."""
        ...

    async def stop(self) -> None:
        """Stop ticking; no tick runs after this returns."""
        ...

    async def wait(self) -> None:
        """Wait until the task finishes on its own or the scheduler is stopped."""
        ...
