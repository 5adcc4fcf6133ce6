"""
TTL cache of cooked search results with prefix aliases.

Every key starts with a fixed namespace prefix. A stored value is either a
resolved record or an alias string naming the canonical key suffix, so a
short prefix typed on the way to a longer query costs a few bytes instead
of a second copy of the result.
"""

from __future__ import annotations

__all__ = ["CacheStore"]

import logging
from collections.abc import Iterable
from typing import Any

from omnisearch.protocols import AlarmScheduler, KeyValueStore
from omnisearch.schemas import AliasEntry, ResolvedEntry, entry_from_record

logger = logging.getLogger(__name__)

# aliases always point straight at a canonical key; this only bounds bad data
_MAX_ALIAS_HOPS = 8


class CacheStore:
    """Cache of :class:`ResolvedEntry` values on top of a key/value store.

    Staleness is left to the caller: :meth:`resolve` returns expired entries
    as-is. Expired entries are also deleted by an alarm when one was
    scheduled, and the oldest half is evicted whenever the store grows past
    half of its quota.

    Args:
        store: Backing key/value store.
        alarms: Optional scheduler used for expiry backstops.
        key_prefix: Namespace for every cache key.
        storage_quota: Store size in bytes.
    """

    def __init__(
        self,
        store: KeyValueStore,
        alarms: AlarmScheduler | None = None,
        *,
        key_prefix: str = "input:",
        storage_quota: int = 5242880,
    ) -> None:
        self._store = store
        self._alarms = alarms
        self.key_prefix = key_prefix
        self.storage_quota = storage_quota

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def key_for(self, suffix: str) -> str:
        return self.key_prefix + suffix

    def resolve(self, key: str) -> ResolvedEntry | None:
        """Look up ``key``, following aliases to the canonical entry.

        Returns:
            The resolved entry (possibly expired), or None when the key, any
            alias target, or a readable record is missing.
        """
        seen: set[str] = set()
        while len(seen) < _MAX_ALIAS_HOPS:
            if key in seen:
                logger.warning("Alias cycle detected at %r", key)
                return None
            seen.add(key)

            raw = self._store.get(key).get(key)
            if raw is None:
                return None

            entry = entry_from_record(raw)
            if entry is None:
                logger.warning("Ignoring unreadable cache record %r", key)
                return None
            if isinstance(entry, ResolvedEntry):
                return entry
            key = self.key_for(entry.target)

        logger.warning("Alias chain too long, giving up at %r", key)
        return None

    def put(self, key: str, entry: ResolvedEntry | AliasEntry) -> None:
        """Write one entry and enforce the quota."""
        self._store.set({key: entry.to_record()})
        self.evict_if_over_quota()

    def put_aliases(self, keys: Iterable[str], canonical_suffix: str) -> None:
        """Point every key in ``keys`` at the canonical key suffix."""
        canonical_key = self.key_for(canonical_suffix)
        aliases = {k: canonical_suffix for k in keys if k != canonical_key}
        if not aliases:
            return
        self._store.set(aliases)
        logger.debug("Stored %d aliases for %r", len(aliases), canonical_suffix)
        self.evict_if_over_quota()

    def remove(self, key: str) -> None:
        self._store.remove(key)

    def on_alarm(self, name: str) -> None:
        """Expiry alarm callback: the alarm name is the cache key."""
        if name.startswith(self.key_prefix):
            logger.debug("Expiring %r", name)
            self.remove(name)

    def schedule_expiry(self, key: str, when_ms: float) -> None:
        """Register an alarm that deletes ``key`` at ``when_ms``."""
        if self._alarms is not None:
            self._alarms.create(key, when_ms)

    def evict_if_over_quota(self) -> int:
        """Evict the oldest half of the cache once it outgrows half the quota.

        Entries are ordered by expiry time, which tracks write time because
        every entry is written with the same lifetime. Aliases take their
        target's expiry, or sort first when the target is gone.

        Returns:
            Number of entries removed.
        """
        in_use = self._store.get_bytes_in_use(None)
        if in_use <= self.storage_quota / 2:
            return 0

        data = {
            k: v
            for k, v in self._store.get(None).items()
            if k.startswith(self.key_prefix)
        }
        keys = sorted(data, key=lambda k: self._expiry_of(data, k))
        victims = keys[: len(keys) // 2]
        if victims:
            self._store.remove(victims)
        logger.debug(
            "Cache uses %d of %d bytes, evicted %d of %d entries",
            in_use,
            self.storage_quota,
            len(victims),
            len(keys),
        )
        return len(victims)

    def _expiry_of(self, data: dict[str, Any], key: str) -> float:
        value = data.get(key)
        if isinstance(value, str):
            value = data.get(self.key_for(value))
        if isinstance(value, dict):
            expires = value.get("expires")
            if isinstance(expires, int | float):
                return expires
        return 0
