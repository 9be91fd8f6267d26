"""Clock port."""

from typing import Protocol


class Clock(Protocol):
    """Port for reading the local wall clock."""

    def now_ms(self) -> int:
        """Return the current local time as epoch milliseconds."""
        ...
