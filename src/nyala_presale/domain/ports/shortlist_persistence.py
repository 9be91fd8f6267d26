"""Shortlist persistence port."""

from typing import Protocol

from nyala_presale.domain.models.shortlist_state import PersistedShortlist, ShortlistState


class ShortlistPersistence(Protocol):
    """Port for loading and saving the shortlist across reloads."""

    def load(self) -> PersistedShortlist:
        """Load the persisted shortlist.

        Raises:
            StorageUnavailable: If the backend cannot be read.
        """
        ...

    def save(self, state: ShortlistState) -> None:
        """Persist the given shortlist state.

        Raises:
            StorageUnavailable: If the backend cannot be written.
        """
        ...
