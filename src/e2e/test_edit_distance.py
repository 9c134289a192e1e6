# src/e2e/test_edit_distance.py

import pytest

from catalog.search import edit_distance


WORDS = ["", "a", "code", "cade", "clean", "kitten", "sitting", "مئة", "عام", "flaw", "lawn"]


@pytest.mark.parametrize("a,b,expected", [
    ("kitten", "sitting", 3),
    ("flaw", "lawn", 2),
    ("cade", "code", 1),
    ("", "", 0),
    ("abc", "abc", 0),
    ("abc", "", 3),
    ("", "xyz", 3),
    ("عام", "عالم", 1),
])
def test_known_distances(a, b, expected):
    assert edit_distance(a, b) == expected


def test_symmetric():
    for a in WORDS:
        for b in WORDS:
            assert edit_distance(a, b) == edit_distance(b, a)


def test_identity_is_zero():
    for w in WORDS:
        assert edit_distance(w, w) == 0


def test_empty_is_length_of_other():
    for w in WORDS:
        assert edit_distance("", w) == len(w)
        assert edit_distance(w, "") == len(w)


def test_bounded_by_longer_length():
    # never more edits than rewriting the longer string outright
    assert edit_distance("zzzzz", "clean") <= 5
    assert edit_distance("ab", "xyz") == 3
