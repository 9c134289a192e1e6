from __future__ import annotations
import time
from dataclasses import replace

from .models import Book, Comment

DEFAULT_USER = "مستخدم جديد"
DEFAULT_AVATAR = "https://i.pravatar.cc/150?u=newuser"
MAX_STARS = 5

def apply_rating(book: Book, value: int) -> Book:
    """
    Fold one star rating into the running average:
        rating' = (rating * count + value) / (count + 1), count' = count + 1
    Every submission counts; there is no per-user tracking.
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= MAX_STARS:
        raise ValueError(f"rating must be an integer between 1 and {MAX_STARS}, got {value!r}")
    n = book.ratings_count
    return replace(
        book,
        rating=(book.rating * n + value) / (n + 1),
        ratings_count=n + 1,
    )

def add_comment(book: Book, text: str, *, user: str = DEFAULT_USER, avatar: str = DEFAULT_AVATAR) -> Book:
    if text.strip() == "":
        return book
    comment = Comment(id=int(time.time() * 1000), user=user, avatar=avatar, text=text)
    return replace(book, comments=book.comments + (comment,))
