from __future__ import annotations
import json
import logging
import threading
import uuid
from dataclasses import asdict
from typing import Callable, Dict, List, Optional

from .models import Book, CartLine, Receipt
from .DB.api import KeyValueStore
from . import config as CFG

log = logging.getLogger(__name__)

EMPTY_CART_NOTICE = "سلة التسوق فارغة"
ADDED_NOTICE = "تمت إضافة \"{title}\" إلى السلة"


class EmptyCartError(ValueError):
    """Checkout attempted with nothing in the cart."""


def _log_order(receipt: Receipt) -> None:
    log.info("Order %s placed: %d line(s), total=%.2f",
             receipt.order_id, len(receipt.lines), receipt.total)


class Cart:
    """
    Shopping cart persisted through an injected key/value store.

    The stored value is read once here and rewritten in full after every
    mutation. Missing or unreadable data starts an empty cart.
    """

    def __init__(self, store: KeyValueStore, key: str = CFG.CART_KEY) -> None:
        self._store = store
        self._key = key
        self._lines: Dict[int, CartLine] = self._restore()

    # ------------- persistence -------------

    def _restore(self) -> Dict[int, CartLine]:
        raw = self._store.get(self._key)
        if raw is None:
            return {}
        try:
            rows = json.loads(raw)
            lines = [CartLine(book_id=int(r["book_id"]), title=str(r["title"]),
                              price=float(r["price"]), quantity=int(r["quantity"]))
                     for r in rows]
        except (ValueError, TypeError, KeyError) as exc:
            log.warning("Discarding unreadable cart under %r: %r", self._key, exc)
            return {}
        return {ln.book_id: ln for ln in lines if ln.quantity > 0}

    def _save(self) -> None:
        self._store.set(self._key, json.dumps([asdict(ln) for ln in self._lines.values()],
                                              ensure_ascii=False))

    # ------------- queries -------------

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def count(self) -> int:
        return sum(ln.quantity for ln in self._lines.values())

    @property
    def total(self) -> float:
        return sum(ln.subtotal for ln in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    # ------------- mutations -------------

    def add(self, book: Book, quantity: int = 1) -> CartLine:
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")
        line = self._lines.get(book.id)
        if line is None:
            line = CartLine(book_id=book.id, title=book.title, price=book.price, quantity=0)
            self._lines[book.id] = line
        line.quantity += quantity
        self._save()
        return line

    def remove(self, book_id: int) -> None:
        if self._lines.pop(book_id, None) is not None:
            self._save()

    def set_quantity(self, book_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove(book_id)
            return
        if book_id not in self._lines:
            raise KeyError(book_id)
        self._lines[book_id].quantity = quantity
        self._save()

    def clear(self) -> None:
        self._lines.clear()
        self._save()

    def checkout(self, notify: Optional[Callable[[Receipt], None]] = None) -> Receipt:
        """Simulate a purchase: notify, then empty the cart."""
        if not self._lines:
            raise EmptyCartError(EMPTY_CART_NOTICE)
        receipt = Receipt(
            order_id=uuid.uuid4().hex[:12],
            lines=[CartLine(**asdict(ln)) for ln in self._lines.values()],
            total=self.total,
        )
        (notify or _log_order)(receipt)
        self.clear()
        return receipt


class Acknowledgement:
    """
    Transient "added to cart" notice. `show()` replaces any visible notice and
    restarts the dismiss timer; the previous timer is cancelled.
    """

    def __init__(self, seconds: float = CFG.ACK_SECONDS) -> None:
        self.seconds = seconds
        self._message: Optional[str] = None
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[str]:
        return self._message

    def show(self, message: str) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._message = message
            self._generation += 1
            timer = threading.Timer(self.seconds, self._dismiss, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def _dismiss(self, generation: int) -> None:
        with self._lock:
            # a newer show() owns the notice now
            if generation != self._generation:
                return
            self._message = None
            self._timer = None

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._message = None
