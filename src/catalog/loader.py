from __future__ import annotations
import json
import logging
import os
from typing import Iterable, List, Optional

from .models import Book
from .config import DEFAULT_CATALOG_PATH

log = logging.getLogger(__name__)

def load_catalog(path: Optional[str | os.PathLike] = None) -> List[Book]:
    """
    Read the catalog file (a JSON array of book records) into Book objects.
    Defaults to the catalog shipped with the package.
    """
    path = os.fspath(path) if path is not None else os.fspath(DEFAULT_CATALOG_PATH)
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    with open(path, "r", encoding="utf-8") as f:
        try:
            rows = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(rows, list):
        raise ValueError(f"{path}: expected a JSON array of books")

    books: List[Book] = []
    seen: set[int] = set()
    for i, row in enumerate(rows):
        try:
            book = Book.from_dict(row)
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"{path}: bad book record #{i}: {exc!r}") from exc
        if book.id in seen:
            raise ValueError(f"{path}: duplicate book id {book.id}")
        seen.add(book.id)
        books.append(book)

    log.info("Loaded %d books from %s", len(books), path)
    return books

def build_universe(books: Iterable[Book]) -> List[str]:
    """Titles and authors of every book, deduplicated, first-seen order."""
    return list(dict.fromkeys(t for b in books for t in (b.title, b.author)))
