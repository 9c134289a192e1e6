from __future__ import annotations
from functools import lru_cache
from typing import FrozenSet

def normalize_query(text: str) -> str:
    """Lower-case and trim a raw query. Empty result means "no text filter"."""
    return text.strip().lower()

@lru_cache(maxsize=4096)
def tokenize(text: str) -> FrozenSet[str]:
    """
    Lower-case `text` and split it on whitespace into a set of unique words.
    Duplicates collapse; empty or whitespace-only input yields an empty set.

    Cached per input string; catalog titles and authors are static.
    """
    return frozenset(text.lower().split())
