"""
SQLite-backed key/value store.

Each entry is one row holding its key and the JSON encoding of its value,
so single-key writes are atomic while batches stay independent rows.
"""

from __future__ import annotations

__all__ = ["SqliteStore"]

import contextlib
import json
import logging
import sqlite3
import types
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Self

from omnisearch.protocols import StoreKeys

from ._sizing import dump_value

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS kv (
  key   TEXT NOT NULL PRIMARY KEY,
  value TEXT NOT NULL
);
"""

_SIZE_EXPR = "length(CAST(key AS BLOB)) + length(CAST(value AS BLOB))"


class SqliteStore:
    """Persistent key/value store in a single SQLite file."""

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the store.

        Args:
            db_path: Path to the SQLite file, or ":memory:".
        """
        self._db_path = db_path if db_path == ":memory:" else Path(db_path)
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Open the SQLite connection and create the schema."""
        if self._conn:
            return

        if isinstance(self._db_path, Path):
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self._db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_CREATE_TABLE_SQL)
        self._conn.commit()

    def get(self, keys: StoreKeys = None) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for row in self._select("key, value", keys):
            try:
                result[row["key"]] = json.loads(row["value"])
            except json.JSONDecodeError:
                logger.warning("Skipping undecodable value for key %r", row["key"])
        return result

    def set(self, items: Mapping[str, Any]) -> None:
        if not items:
            return

        self.conn.executemany(
            """
            INSERT INTO kv (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            [(key, dump_value(value)) for key, value in items.items()],
        )
        self.conn.commit()

    def remove(self, keys: str | list[str]) -> None:
        unique = {keys} if isinstance(keys, str) else set(keys)
        if not unique:
            return

        placeholders = ",".join("?" for _ in unique)
        self.conn.execute(f"DELETE FROM kv WHERE key IN ({placeholders})", tuple(unique))
        self.conn.commit()

    def get_bytes_in_use(self, keys: StoreKeys = None) -> int:
        rows = self._select(f"COALESCE(SUM({_SIZE_EXPR}), 0) AS size", keys)
        return int(rows[0]["size"]) if rows else 0

    def clear(self) -> None:
        self.conn.execute("DELETE FROM kv")
        self.conn.commit()

    def vacuum(self) -> None:
        """Rebuild the SQLite file and reclaim disk space."""
        self.conn.execute("VACUUM")
        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is None:
            return

        with contextlib.suppress(sqlite3.Error):
            self._conn.close()
        self._conn = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Return the active SQLite connection.

        Raises:
            RuntimeError: If the connection has not been established.
        """
        if self._conn is None:
            raise RuntimeError(
                "Database connection is not established. Call connect() first."
            )
        return self._conn

    def _select(self, columns: str, keys: StoreKeys) -> list[sqlite3.Row]:
        if keys is None:
            return self.conn.execute(f"SELECT {columns} FROM kv").fetchall()

        wanted = [keys] if isinstance(keys, str) else list(keys)
        if not wanted:
            return []
        placeholders = ",".join("?" for _ in wanted)
        query = f"SELECT {columns} FROM kv WHERE key IN ({placeholders})"
        return self.conn.execute(query, tuple(wanted)).fetchall()

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<SqliteStore path='{self._db_path}'>"
