"""Protocol for tasks driven by a tick scheduler."""

from typing import Protocol


class ScheduledTaskProtocol(Protocol):
    """A unit of periodic work: tick, compute, emit or stop."""

    @property
    def is_done(self) -> bool:
        """Whether the task reached a terminal phase and needs no more ticks."""
        ...

    def tick(self) -> object:
        """Run one step of the task."""
        ...

    def cancel(self) -> None:
        """Move the task to a terminal phase without completing it."""
        ...
