"""Error taxonomy for the reservation core.

None of these escape to UI callers: the engines and the store absorb them and
convert them into well-defined state.
"""

from __future__ import annotations


class PresaleError(Exception):
    """Base class for all errors raised inside the reservation core."""


class InvalidTargetTime(PresaleError):
    """A countdown target instant could not be interpreted."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid target time {value!r}: {reason}")


class StorageUnavailable(PresaleError):
    """The shortlist persistence backend failed to load or save."""

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Shortlist storage unavailable during {operation}{detail}")


class DuplicateExpireInvocation(PresaleError):
    """A countdown attempted to expire a second time."""
