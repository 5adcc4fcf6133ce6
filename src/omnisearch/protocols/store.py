from collections.abc import Mapping
from typing import Any, Protocol

StoreKeys = str | list[str] | None


class KeyValueStore(Protocol):
    """A flat, JSON-valued key/value store.

    Writes are atomic per key; batches are independent single-key writes.
    """

    def get(self, keys: StoreKeys = None) -> dict[str, Any]:
        """Returns the stored values for ``keys``.

        Args:
            keys: A single key, a list of keys, or None for every entry.

        Returns:
            A mapping containing only the keys that exist.
        """
        ...

    def set(self, items: Mapping[str, Any]) -> None:
        """Stores every key/value pair of ``items``."""
        ...

    def remove(self, keys: str | list[str]) -> None:
        """Deletes one or more keys. Missing keys are ignored."""
        ...

    def get_bytes_in_use(self, keys: StoreKeys = None) -> int:
        """Returns the space used by ``keys`` (or by everything), in bytes."""
        ...

    def clear(self) -> None:
        """Deletes every entry."""
        ...
