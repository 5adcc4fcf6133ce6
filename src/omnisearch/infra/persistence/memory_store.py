from __future__ import annotations

__all__ = ["MemoryStore"]

import json
from collections.abc import Mapping
from typing import Any

from omnisearch.protocols import StoreKeys

from ._sizing import dump_value, record_size


class MemoryStore:
    """Process-local key/value store.

    Values are kept in their JSON-encoded form so callers always get fresh
    copies back and byte accounting matches :class:`SqliteStore`.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, keys: StoreKeys = None) -> dict[str, Any]:
        return {k: json.loads(v) for k, v in self._select(keys)}

    def set(self, items: Mapping[str, Any]) -> None:
        for key, value in items.items():
            self._data[key] = dump_value(value)

    def remove(self, keys: str | list[str]) -> None:
        for key in [keys] if isinstance(keys, str) else keys:
            self._data.pop(key, None)

    def get_bytes_in_use(self, keys: StoreKeys = None) -> int:
        return sum(record_size(k, v) for k, v in self._select(keys))

    def clear(self) -> None:
        self._data.clear()

    def _select(self, keys: StoreKeys) -> list[tuple[str, str]]:
        if keys is None:
            return list(self._data.items())
        wanted = [keys] if isinstance(keys, str) else keys
        return [(k, self._data[k]) for k in wanted if k in self._data]

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<MemoryStore entries={len(self._data)}>"
