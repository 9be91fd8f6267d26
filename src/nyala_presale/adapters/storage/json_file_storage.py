"""Key-value storage backed by a JSON file on disk."""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from nyala_presale.domain.errors import StorageUnavailable
from nyala_presale.domain.ports.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)


class JsonFileKeyValueStorage(KeyValueStorage):
    """Stores string values in a single JSON object file.

    Writes go to a temporary file that replaces the original, so a crash
    mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get_item(self, key: str) -> str | None:
        return self._read("get_item").get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read("set_item")
        items[key] = value
        self._write(items, "set_item")

    def remove_item(self, key: str) -> None:
        items = self._read("remove_item")
        if items.pop(key, None) is not None:
            self._write(items, "remove_item")

    def _read(self, operation: str) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageUnavailable(operation, e) from e
        if not isinstance(data, dict):
            raise StorageUnavailable(
                operation, ValueError(f"{self.path} does not contain a JSON object")
            )
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, items: dict[str, str], operation: str) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageUnavailable(operation, e) from e
        logger.debug(f"Wrote {len(items)} key(s) to {self.path}")
