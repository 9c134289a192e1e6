# src/e2e/test_reviews.py

import pytest

from catalog.reviews import apply_rating, add_comment, DEFAULT_USER


def test_running_average_update(make_book):
    book = make_book(1, "Clean Code", "Robert Martin", rating=4.0, ratings_count=10)
    updated = apply_rating(book, 5)
    assert updated.rating == pytest.approx((4.0 * 10 + 5) / 11)
    assert updated.rating == pytest.approx(4.0909, abs=1e-4)
    assert updated.ratings_count == 11
    # original untouched
    assert book.rating == 4.0 and book.ratings_count == 10


def test_first_rating(make_book):
    book = make_book(1, "t", "a", rating=0.0, ratings_count=0)
    assert apply_rating(book, 3).rating == 3.0


def test_repeat_submissions_all_count(make_book):
    book = make_book(1, "t", "a", rating=4.0, ratings_count=1)
    for _ in range(3):
        book = apply_rating(book, 1)
    assert book.ratings_count == 4
    assert book.rating == pytest.approx((4.0 + 1 + 1 + 1) / 4)


@pytest.mark.parametrize("bad", [0, 6, -1, 2.5, "5", None, True])
def test_rejects_out_of_range(make_book, bad):
    with pytest.raises(ValueError):
        apply_rating(make_book(1, "t", "a"), bad)


def test_add_comment_appends(make_book):
    book = make_book(1, "t", "a")
    updated = add_comment(book, "كتاب رائع")
    assert len(updated.comments) == 1
    c = updated.comments[0]
    assert c.text == "كتاب رائع"
    assert c.user == DEFAULT_USER
    assert c.id > 0
    assert book.comments == ()


def test_blank_comment_ignored(make_book):
    book = make_book(1, "t", "a")
    assert add_comment(book, "   ") is book
