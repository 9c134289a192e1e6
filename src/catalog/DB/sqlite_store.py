# catalog/DB/sqlite_store.py
from __future__ import annotations
import sqlite3
from typing import Optional
from .api import KeyValueStore

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
  key TEXT PRIMARY KEY,
  value TEXT NOT NULL
);
"""

class SQLiteStore(KeyValueStore):
    """Single-table key/value store; every write is committed immediately."""
    def __init__(self, db_path: str) -> None:
        self.path = db_path
        # shared with Flask request threads
        self.conn: sqlite3.Connection = sqlite3.connect(db_path, check_same_thread=False)
        self.conn.executescript(_SCHEMA)

    def get(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT OR REPLACE INTO kv(key, value) VALUES (?,?)",
            (key, value),
        )
        self.conn.commit()

    def delete(self, key: str) -> None:
        self.conn.execute("DELETE FROM kv WHERE key=?", (key,))
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()
