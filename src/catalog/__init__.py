"""
Bookstore catalog core.

Browsing a small, static book catalog: category filtering, text search with
a fuzzy fallback (bounded edit distance over title/author words), live
search-box suggestions with highlight spans, star ratings and comments, and
a cart persisted through a pluggable key/value store.

Example Usage:
    from catalog import Engine

    eng = Engine()
    eng.build(db_dsn="memory://")
    for book in eng.filter("الكل", "clean cade"):
        print(book.title, book.author)
    eng.shutdown()
"""

# src/catalog/__init__.py
from .engine import Engine  # re-export
from .search import edit_distance, matches, filter_books
from .normalize import tokenize
from .suggest import suggest, highlight_spans

__version__ = "1.0.0"
__all__ = ["Engine", "edit_distance", "tokenize", "matches", "filter_books",
           "suggest", "highlight_spans"]
