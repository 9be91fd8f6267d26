"""In-memory key-value storage."""

from nyala_presale.domain.ports.key_value_storage import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):
    """Key-value storage that lives as long as the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)
