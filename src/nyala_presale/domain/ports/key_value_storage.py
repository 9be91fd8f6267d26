"""Key-value storage port."""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Port for a string key-value store that outlives a page reload.

    Implementations raise ``StorageUnavailable`` when the backend cannot be used.
    """

    def get_item(self, key: str) -> str | None:
        """Get the value stored under a key, or None if absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a value under a key."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        ...
