# catalog/engine.py
from __future__ import annotations

import os
import logging
from typing import Callable, Dict, List, Optional, Tuple

from . import config as CFG
from .models import Book, Receipt
from .loader import load_catalog, build_universe
from .search import filter_books
from .suggest import SuggestionBox, suggest, highlight_spans
from .reviews import apply_rating, add_comment
from .cart import Cart, Acknowledgement, ADDED_NOTICE
from .DB.api import KeyValueStore, make_store

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the catalog (loaded once, updated only by ratings/comments),
      - search (search.filter_books) and suggestions (suggest.suggest),
      - the cart, persisted through a KeyValueStore (SQLite or in-memory).

    Public API (used by the Flask front end and tests):
      * build(catalog_path, db_dsn): load catalog -> open store -> restore cart
      * filter(category, query):     visible books, memoized on the last inputs
      * suggest(query, cap) / highlight(text, query)
      * rate / comment:              running-average rating, new comment
      * add_to_cart / remove_from_cart / checkout
      * shutdown():                  close underlying resources
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.books: List[Book] = []
        self.universe: List[str] = []
        self.suggestions: Optional[SuggestionBox] = None
        self.cart: Optional[Cart] = None
        self.ack = Acknowledgement(CFG.ACK_SECONDS)
        self._store: Optional[KeyValueStore] = None
        self._notify: Optional[Callable[[Receipt], None]] = None
        self._revision = 0
        self._memo_key: Optional[Tuple[int, str, str]] = None
        self._memo_rows: List[Book] = []

    # /* ~~~ Load the catalog and wire up cart storage ~~~ */
    def build(
        self,
        catalog_path: Optional[str] = None,   # JSON catalog; None = packaged one
        *,
        db_dsn: Optional[str] = None,         # e.g., "sqlite:///./cart.sqlite" or "memory://"
        store: Optional[KeyValueStore] = None,  # pre-built store (overrides db_dsn)
        notify: Optional[Callable[[Receipt], None]] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ["BOOKSTORE_VERBOSE"] = "1"

        self.books = load_catalog(catalog_path)
        self.universe = build_universe(self.books)
        self.suggestions = SuggestionBox(self.universe, cap=CFG.SUGGESTION_CAP)

        if store is None:
            dsn = db_dsn or CFG.DEFAULT_STORE_DSN
            log.info("Initializing cart store: %s", dsn)
            store = make_store(dsn)
        self._store = store
        self.cart = Cart(store, key=CFG.CART_KEY)
        self._notify = notify
        self._touch()
        log.info("Engine build() complete: books=%d, cart_lines=%d", len(self.books), len(self.cart))

    # ------------- queries -------------

    def _require(self) -> None:
        if self.cart is None:
            raise RuntimeError("Engine not initialized. Call build() first.")

    def _touch(self) -> None:
        self._revision += 1

    @property
    def categories(self) -> List[str]:
        return [CFG.ALL_CATEGORY, *CFG.CATEGORIES]

    # /* ~~~ Books visible for the current category + search text ~~~ */
    def filter(self, category: str = CFG.ALL_CATEGORY, query: str = "") -> List[Book]:
        self._require()
        key = (self._revision, category, query)
        if key != self._memo_key:
            self._memo_rows = filter_books(self.books, category, query)
            self._memo_key = key
        return list(self._memo_rows)

    def suggest(self, query: str, cap: int = CFG.SUGGESTION_CAP) -> List[str]:
        self._require()
        return suggest(self.universe, query, cap)

    def highlight(self, text: str, query: str) -> List[Tuple[int, int]]:
        return highlight_spans(text, query)

    def book(self, book_id: int) -> Book:
        self._require()
        for b in self.books:
            if b.id == book_id:
                return b
        raise KeyError(book_id)

    # ------------- updates -------------

    def _replace(self, updated: Book) -> Book:
        self.books = [updated if b.id == updated.id else b for b in self.books]
        self._touch()
        return updated

    def rate(self, book_id: int, value: int) -> Book:
        return self._replace(apply_rating(self.book(book_id), value))

    def comment(self, book_id: int, text: str) -> Book:
        book = self.book(book_id)
        updated = add_comment(book, text)
        if updated is book:
            return book
        return self._replace(updated)

    # ------------- cart -------------

    def add_to_cart(self, book_id: int, quantity: int = 1) -> str:
        """Add a book and show the transient acknowledgement; returns its text."""
        book = self.book(book_id)
        self.cart.add(book, quantity)  # type: ignore[union-attr]
        message = ADDED_NOTICE.format(title=book.title)
        self.ack.show(message)
        return message

    def remove_from_cart(self, book_id: int) -> None:
        self._require()
        self.cart.remove(book_id)  # type: ignore[union-attr]

    def checkout(self) -> Receipt:
        self._require()
        return self.cart.checkout(self._notify)  # type: ignore[union-attr]

    # ------------- teardown -------------

    # /* ~~~ Close underlying resources (DB handles, timers) ~~~ */
    def shutdown(self) -> None:
        try:
            self.ack.cancel()
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self.cart = None
            self.suggestions = None
            log.info("Engine shutdown complete")
