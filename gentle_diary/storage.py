"""SQLite key-value backing store and the JSON entry list kept in it."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import StorageReadFailure, StorageWriteFailure
from .schemas import Entry


logger = logging.getLogger(__name__)


class SQLiteKeyValueStore:
    """Persistent string key-value store in a single SQLite table."""

    def __init__(self, db_path: str):
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(db_path)
        self.conn.row_factory = sqlite3.Row
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
            """
        )
        self.conn.commit()

    def get(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            """
            INSERT INTO kv (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value=excluded.value,
                updated_at=datetime('now')
            """,
            (key, value),
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()


def _decode_entries(raw: str) -> List[Entry]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageReadFailure(f"Stored value is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise StorageReadFailure(f"Stored value must be a list, got {type(data).__name__}")
    return [Entry.from_dict(item) for item in data]


class EntryStorage:
    """Reads and writes the whole entry list as one JSON blob under one key."""

    def __init__(self, store: SQLiteKeyValueStore, storage_key: str):
        self.store = store
        self.storage_key = storage_key

    def load_all(self) -> List[Entry]:
        """Return stored entries newest-first, or an empty list if none are readable."""
        try:
            raw = self.store.get(self.storage_key)
            if raw is None:
                return []
            return _decode_entries(raw)
        except StorageReadFailure as exc:
            logger.warning("Ignoring unreadable entries under %r: %s", self.storage_key, exc)
            return []
        except Exception:
            logger.warning("Error loading entries under %r", self.storage_key, exc_info=True)
            return []

    def save_all(self, entries: Sequence[Entry]) -> None:
        """Replace the stored list. Raises ``StorageWriteFailure`` if the store refuses."""
        payload = json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)
        try:
            self.store.set(self.storage_key, payload)
        except sqlite3.Error as exc:
            logger.error("Error saving %d entries under %r: %s", len(entries), self.storage_key, exc)
            raise StorageWriteFailure("Error saving entry. Storage may be full.") from exc
