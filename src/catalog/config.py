from __future__ import annotations
from pathlib import Path

# /* ~~~ category filter: fixed closed set plus the "no restriction" sentinel ~~~ */
ALL_CATEGORY: str = "الكل"
CATEGORIES: list[str] = ["روايات", "تاريخ", "علوم", "تقنية", "تطوير الذات"]

# Suggestions shown under the search box
SUGGESTION_CAP: int = 7

# Fuzzy fallback: queries shorter than this tolerate fewer edits
SHORT_QUERY_LEN: int = 5
SHORT_QUERY_THRESHOLD: int = 1
LONG_QUERY_THRESHOLD: int = 2

# Cart persistence
CART_KEY: str = "bookstore-cart"
ACK_SECONDS: float = 3.0     # "added to cart" notice lifetime

# Storage DSN: "memory://" or "sqlite:///path/to/store.sqlite"
DEFAULT_STORE_DSN: str = "memory://"

# Packaged catalog
DEFAULT_CATALOG_PATH: Path = Path(__file__).resolve().parent / "data" / "books.json"
