"""Flat string key/value stores backing local persistence.

Components receive a store instance instead of reaching for a global, so the
SQLite file can be swapped for :class:`MemoryStore` in tests or when the
database is unavailable.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the backing store cannot be read or written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dictionary backed store; contents die with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> list[str]:
        return list(self._data)


class SqliteStore:
    """Single ``kv`` table in a SQLite file.

    Each call opens its own connection so the store can be shared freely
    between widgets of the same process.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        try:
            conn = self._connect()
            try:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS kv (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                    """
                )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Cannot open store at {self.path}: {exc}") from exc

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed reading {key!r}: {exc}") from exc
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        try:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT INTO kv(key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, value),
                )
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed writing {key!r}: {exc}") from exc


def open_default_store(path: Path | str) -> KeyValueStore:
    """Open the SQLite store, falling back to memory-only mode on failure."""
    try:
        return SqliteStore(path)
    except StoreError as exc:
        logger.warning("Local store unavailable, continuing in memory: %s", exc)
        return MemoryStore()


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "StoreError",
    "open_default_store",
]
