# src/e2e/conftest.py
"""Shared fixtures: a tiny catalog written to disk for Engine-level tests."""
import json
from pathlib import Path

import pytest

from catalog.models import Book


def _make_book(id, title, author, category="تقنية", **kw) -> Book:
    return Book(
        id=id, title=title, author=author,
        description=kw.get("description", ""),
        cover_image=kw.get("cover_image", ""),
        category=category,
        rating=kw.get("rating", 4.0),
        ratings_count=kw.get("ratings_count", 10),
        price=kw.get("price", 10.0),
    )


SAMPLE_BOOKS = [
    {"id": 1, "title": "Clean Code", "author": "Robert Martin", "category": "تقنية",
     "description": "", "coverImage": "", "rating": 4.0, "ratingsCount": 10, "price": 30.0, "comments": []},
    {"id": 2, "title": "Clean Architecture", "author": "Robert Martin", "category": "تقنية",
     "description": "", "coverImage": "", "rating": 4.5, "ratingsCount": 4, "price": 25.0, "comments": []},
    {"id": 3, "title": "Refactoring", "author": "Martin Fowler", "category": "تقنية",
     "description": "", "coverImage": "", "rating": 4.2, "ratingsCount": 8, "price": 40.0, "comments": []},
    {"id": 4, "title": "الخيميائي", "author": "باولو كويلو", "category": "روايات",
     "description": "", "coverImage": "", "rating": 4.3, "ratingsCount": 20, "price": 12.0,
     "comments": [{"id": 9, "user": "سارة", "avatar": "", "text": "جميلة"}]},
]


@pytest.fixture
def catalog_path(tmp_path: Path) -> str:
    p = tmp_path / "books.json"
    p.write_text(json.dumps(SAMPLE_BOOKS, ensure_ascii=False), encoding="utf-8")
    return str(p)


@pytest.fixture
def make_book():
    """Factory for in-memory Book objects (no catalog file needed)."""
    return _make_book
