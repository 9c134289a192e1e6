# src/e2e/test_loader.py

import json
from pathlib import Path

import pytest

from catalog.loader import load_catalog, build_universe
from catalog import config as CFG


def test_packaged_catalog_loads():
    books = load_catalog()
    assert books
    assert len({b.id for b in books}) == len(books)
    assert all(b.category in CFG.CATEGORIES for b in books)
    assert all(0 <= b.rating <= 5 and b.ratings_count >= 0 and b.price >= 0 for b in books)


def test_loads_file(catalog_path):
    books = load_catalog(catalog_path)
    assert [b.id for b in books] == [1, 2, 3, 4]
    assert books[3].comments[0].user == "سارة"
    assert books[0].to_dict()["ratingsCount"] == 10


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / "nope.json")


def test_invalid_json(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text("[{", encoding="utf-8")
    with pytest.raises(ValueError):
        load_catalog(p)


def test_bad_record_names_index(tmp_path: Path):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps([{"id": 1, "title": "t"}]), encoding="utf-8")
    with pytest.raises(ValueError, match="#0"):
        load_catalog(p)


def test_duplicate_ids(tmp_path: Path):
    row = {"id": 1, "title": "t", "author": "a", "category": "تقنية"}
    p = tmp_path / "dup.json"
    p.write_text(json.dumps([row, row]), encoding="utf-8")
    with pytest.raises(ValueError, match="duplicate"):
        load_catalog(p)


def test_universe_is_titles_and_authors_deduplicated(catalog_path):
    universe = build_universe(load_catalog(catalog_path))
    assert universe == [
        "Clean Code", "Robert Martin", "Clean Architecture",
        "Refactoring", "Martin Fowler", "الخيميائي", "باولو كويلو",
    ]
