# catalog/DB/memory_store.py
from __future__ import annotations
from typing import Dict, Optional
from .api import KeyValueStore

class MemoryStore(KeyValueStore):
    """Dict-backed store (tests and ephemeral sessions)."""
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._rows: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._rows.get(key)

    def set(self, key: str, value: str) -> None:
        self._rows[key] = value

    def delete(self, key: str) -> None:
        self._rows.pop(key, None)

    def close(self) -> None:
        self._rows.clear()
