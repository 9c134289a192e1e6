from __future__ import annotations
from typing import Iterable, List

from .models import Book
from .normalize import normalize_query, tokenize
from . import config as CFG

# Match items against a query: exact substring first, bounded edit distance second.

def edit_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character inserts, deletes and substitutions
    turning `a` into `b`. Symmetric; distance(a, a) == 0.

    Rolling two-row version of the (len(b)+1) x (len(a)+1) table, since only
    the bottom-right cell is consumed.
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(a) + 1))          # row i-1
    for i, cb in enumerate(b, start=1):
        cur = [i] + [0] * len(a)
        for j, ca in enumerate(a, start=1):
            cost = 0 if cb == ca else 1
            cur[j] = min(prev[j] + 1,         # deletion
                         cur[j - 1] + 1,      # insertion
                         prev[j - 1] + cost)  # substitution / match
        prev = cur
    return prev[len(a)]

def fuzzy_threshold(q_norm: str) -> int:
    """Max edits tolerated per word: tighter for short queries."""
    if len(q_norm) < CFG.SHORT_QUERY_LEN:
        return CFG.SHORT_QUERY_THRESHOLD
    return CFG.LONG_QUERY_THRESHOLD

def _candidate_pool(book: Book) -> frozenset[str]:
    return tokenize(book.title) | tokenize(book.author)

def matches(book: Book, query: str) -> bool:
    """True if `book` should be shown for `query` (never mutates either)."""
    q = normalize_query(query)
    if not q:
        return True

    # Fast path: exact substring (leftmost is enough, we only need a yes/no)
    if q in book.title.lower() or q in book.author.lower():
        return True

    pool = _candidate_pool(book)
    if not pool:
        return False
    limit = fuzzy_threshold(q)
    for word in q.split():
        for cand in pool:
            # quick length filter: distance is at least the length difference
            if abs(len(cand) - len(word)) > limit:
                continue
            if edit_distance(word, cand) <= limit:
                return True
    return False

def in_category(book: Book, category: str) -> bool:
    return category == CFG.ALL_CATEGORY or book.category == category

def filter_books(books: Iterable[Book], category: str, query: str) -> List[Book]:
    """
    Stable filter: category first, then text match. Returns a new list in the
    input order; unknown categories simply match nothing.
    """
    by_category = [b for b in books if in_category(b, category)]
    return [b for b in by_category if matches(b, query)]
