# src/e2e/test_matches.py

import pytest

from catalog.search import matches, fuzzy_threshold


@pytest.fixture
def clean_code(make_book):
    return make_book(1, "Clean Code", "Robert Martin", category="Tech")


def test_empty_query_matches_everything(clean_code, make_book):
    assert matches(clean_code, "")
    assert matches(clean_code, "   ")
    assert matches(make_book(2, "", "", category="x"), "")


@pytest.mark.parametrize("q", ["clean", "CODE", "n co", "robert", "rt mar", "  Clean Code  "])
def test_exact_substring_fast_path(clean_code, q):
    assert matches(clean_code, q)


def test_fast_path_skips_fuzzy(clean_code, monkeypatch):
    import catalog.search as S

    def _boom(a, b):
        raise AssertionError("edit distance should not run on an exact hit")
    monkeypatch.setattr(S, "edit_distance", _boom)
    assert matches(clean_code, "clean")


def test_typo_falls_back_to_fuzzy(clean_code):
    # "cade" is one substitution away from "code"
    assert matches(clean_code, "clean cade")
    assert matches(clean_code, "cade")


def test_garbage_query_excluded(clean_code):
    assert not matches(clean_code, "zzzzz")


def test_short_query_threshold_is_one(clean_code):
    assert fuzzy_threshold("cde") == 1
    assert fuzzy_threshold("abcd") == 1
    assert fuzzy_threshold("abcde") == 2
    # "cxdx" needs two edits to reach "code"; too many for a 4-char query
    assert not matches(clean_code, "cxdx")


def test_long_query_tolerates_two_edits(clean_code):
    # "robart" -> "robert" (1), "mertan" -> "martin" (2)
    assert matches(clean_code, "mertan")
    assert matches(clean_code, "zz robart")


def test_any_word_is_enough(clean_code):
    assert matches(clean_code, "qqqqqq martn")


def test_does_not_mutate(clean_code):
    before = clean_code.to_dict()
    matches(clean_code, "clean cade")
    assert clean_code.to_dict() == before
