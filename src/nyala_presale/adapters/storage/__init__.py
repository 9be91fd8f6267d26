"""Storage adapters for the shortlist."""

from nyala_presale.adapters.storage.json_file_storage import JsonFileKeyValueStorage
from nyala_presale.adapters.storage.memory_storage import InMemoryKeyValueStorage
from nyala_presale.adapters.storage.shortlist_persistence import (
    DEFAULT_SHORTLIST_STORAGE_KEY,
    KeyValueShortlistPersistence,
)

__all__ = [
    "DEFAULT_SHORTLIST_STORAGE_KEY",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueShortlistPersistence",
]
