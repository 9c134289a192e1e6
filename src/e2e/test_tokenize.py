# src/e2e/test_tokenize.py

from catalog.normalize import tokenize, normalize_query


def test_lowercases_and_splits():
    assert tokenize("Clean Code") == {"clean", "code"}


def test_duplicates_collapse():
    assert tokenize("Robert robert ROBERT Martin") == {"robert", "martin"}


def test_empty_and_whitespace_only():
    assert tokenize("") == set()
    assert tokenize("   \t  ") == set()


def test_runs_of_whitespace_give_no_empty_tokens():
    assert tokenize("  A   Brief\tHistory \n") == {"a", "brief", "history"}


def test_arabic_words_kept():
    assert tokenize("مئة عام من العزلة") == {"مئة", "عام", "من", "العزلة"}


def test_normalize_query_trims_and_lowercases():
    assert normalize_query("  Clean CODE ") == "clean code"
    assert normalize_query("   ") == ""
