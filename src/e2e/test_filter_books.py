# src/e2e/test_filter_books.py

import pytest

from catalog.search import filter_books
from catalog.config import ALL_CATEGORY


@pytest.fixture
def books(make_book):
    return [
        make_book(1, "Clean Code", "Robert Martin", category="تقنية"),
        make_book(2, "الخيميائي", "باولو كويلو", category="روايات"),
        make_book(3, "Clean Architecture", "Robert Martin", category="تقنية"),
        make_book(4, "Sapiens", "Yuval Noah Harari", category="تاريخ"),
        make_book(5, "Refactoring", "Martin Fowler", category="تقنية"),
    ]


def test_all_sentinel_never_excludes_by_category(books):
    assert filter_books(books, ALL_CATEGORY, "") == books


def test_category_equality(books):
    rows = filter_books(books, "تقنية", "")
    assert [b.id for b in rows] == [1, 3, 5]


def test_unknown_category_matches_nothing(books):
    assert filter_books(books, "طبخ", "") == []


def test_category_then_text(books):
    rows = filter_books(books, "تقنية", "martin")
    assert [b.id for b in rows] == [1, 3, 5]
    rows = filter_books(books, "روايات", "martin")
    assert rows == []


def test_preserves_input_order(books):
    reversed_books = list(reversed(books))
    rows = filter_books(reversed_books, ALL_CATEGORY, "clean")
    assert [b.id for b in rows] == [3, 1]


def test_fuzzy_through_filter(books):
    rows = filter_books(books, ALL_CATEGORY, "sapeins")
    assert [b.id for b in rows] == [4]


def test_idempotent_and_non_mutating(books):
    snapshot = list(books)
    first = filter_books(books, "تقنية", "clean cade")
    second = filter_books(books, "تقنية", "clean cade")
    assert first == second
    assert books == snapshot
    assert first is not books
