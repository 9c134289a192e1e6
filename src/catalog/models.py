from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, List, Tuple

@dataclass(frozen=True)
class Comment:
    id: int
    user: str
    avatar: str
    text: str

@dataclass(frozen=True)
class Book:
    id: int
    title: str
    author: str
    description: str
    cover_image: str
    category: str
    rating: float             # 0..5, running average
    ratings_count: int
    price: float
    comments: Tuple[Comment, ...] = ()

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "Book":
        """Build a Book from the camelCase record used by the catalog file."""
        return cls(
            id=int(row["id"]),
            title=str(row["title"]),
            author=str(row["author"]),
            description=str(row.get("description", "")),
            cover_image=str(row.get("coverImage", "")),
            category=str(row["category"]),
            rating=float(row.get("rating", 0.0)),
            ratings_count=int(row.get("ratingsCount", 0)),
            price=float(row.get("price", 0.0)),
            comments=tuple(Comment(**c) for c in row.get("comments", [])),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "description": self.description,
            "coverImage": self.cover_image,
            "category": self.category,
            "rating": self.rating,
            "ratingsCount": self.ratings_count,
            "price": self.price,
            "comments": [asdict(c) for c in self.comments],
        }

@dataclass
class CartLine:
    book_id: int
    title: str
    price: float
    quantity: int = 1

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

@dataclass(frozen=True)
class Suggestion:
    text: str
    spans: List[Tuple[int, int]]   # (start, end) offsets into text, end exclusive

@dataclass(frozen=True)
class Receipt:
    order_id: str
    lines: List[CartLine] = field(default_factory=list)
    total: float = 0.0
