# catalog/DB/api.py
from __future__ import annotations
import os
from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """Opaque string-keyed store; values are serialized by the caller."""
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str) -> KeyValueStore:
    """
    Factory:
      - sqlite:///path -> SQLiteStore (file created on first use)
      - memory://      -> MemoryStore
    """
    if dsn.startswith("sqlite:///"):
        path = dsn.removeprefix("sqlite:///")
        if not path:
            raise ValueError(f"Missing database path in DSN: {dsn}")
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

        # Lazy imports avoid a circular import with the implementations
        from .sqlite_store import SQLiteStore
        return SQLiteStore(path)

    if dsn.startswith("memory://"):
        from .memory_store import MemoryStore
        return MemoryStore()

    raise ValueError(f"Unsupported store DSN: {dsn}")
