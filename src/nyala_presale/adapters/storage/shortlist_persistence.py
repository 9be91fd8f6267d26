"""Shortlist persistence on top of a key-value storage."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from nyala_presale.domain.models.shortlist_state import PersistedShortlist, ShortlistState
from nyala_presale.domain.ports.shortlist_persistence import ShortlistPersistence

if TYPE_CHECKING:
    from nyala_presale.domain.ports.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_SHORTLIST_STORAGE_KEY = "nyala_villas_shortlist"


class KeyValueShortlistPersistence(ShortlistPersistence):
    """Stores the shortlist as a JSON array of unit ids under a fixed key."""

    def __init__(
        self, storage: KeyValueStorage, storage_key: str = DEFAULT_SHORTLIST_STORAGE_KEY
    ) -> None:
        """Initialize the persistence.

        Args:
            storage: Backing key-value storage.
            storage_key: Key the shortlist is stored under.
        """
        self.storage = storage
        self.storage_key = storage_key

    def load(self) -> PersistedShortlist:
        """Load the shortlist. A corrupt payload is logged and read as empty."""
        raw = self.storage.get_item(self.storage_key)
        if raw is None:
            return PersistedShortlist()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable shortlist under '{self.storage_key}': {e}")
            return PersistedShortlist()
        if not isinstance(data, list):
            logger.warning(f"Discarding shortlist under '{self.storage_key}': not a JSON array")
            return PersistedShortlist()
        unit_ids: list[str] = []
        for entry in data:
            # Entries may also be {"unitId": ..., "addedAt": ...} objects
            if isinstance(entry, dict):
                entry = entry.get("unitId")
            if isinstance(entry, str) and entry:
                unit_ids.append(entry)
            else:
                logger.warning(f"Skipping invalid shortlist entry under '{self.storage_key}'")
        return PersistedShortlist(unit_ids=tuple(unit_ids))

    def save(self, state: ShortlistState) -> None:
        """Save the shortlist ids in display order; an empty shortlist removes the key."""
        if not state.ordered_ids:
            self.storage.remove_item(self.storage_key)
            return
        self.storage.set_item(self.storage_key, json.dumps(list(state.ordered_ids)))
