"""
Key/value store implementations backing the suggestion cache.
"""

__all__ = ["create_store", "MemoryStore", "SqliteStore"]

from pathlib import Path

from omnisearch.infra.paths import CACHE_DB_PATH
from omnisearch.protocols import KeyValueStore
from omnisearch.schemas import CacheConfig

from .memory_store import MemoryStore
from .sqlite_store import SqliteStore


def create_store(cfg: CacheConfig | None = None) -> KeyValueStore:
    """Creates the key/value store selected by ``cfg.backend``.

    Supported backends:
        * "sqlite" (connected, file under the user cache dir by default)
        * "memory"

    Raises:
        ValueError: If the backend name is not supported.
    """
    cfg = cfg or CacheConfig()
    match cfg.backend:
        case "sqlite":
            store = SqliteStore(Path(cfg.path).expanduser() if cfg.path else CACHE_DB_PATH)
            store.connect()
            return store
        case "memory":
            return MemoryStore()
        case _:
            raise ValueError(f"Unsupported cache backend: {cfg.backend!r}")
