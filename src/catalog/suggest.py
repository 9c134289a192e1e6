from __future__ import annotations
import re
from typing import List, Optional, Sequence, Tuple

from .models import Suggestion
from .normalize import normalize_query
from . import config as CFG

# Live suggestions for the search box: plain substring test, no fuzzy matching.

def suggest(universe: Sequence[str], query: str, cap: int = CFG.SUGGESTION_CAP) -> List[str]:
    """
    Return at most `cap` distinct entries of `universe` containing `query`
    (case-insensitive), in universe order. An empty query returns [] which
    the caller treats as "suggestions hidden".
    """
    q = normalize_query(query)
    if not q or cap <= 0:
        return []

    out: List[str] = []
    seen: set[str] = set()
    for text in universe:
        if text in seen or q not in text.lower():
            continue
        seen.add(text)
        out.append(text)
        if len(out) >= cap:
            break
    return out

def highlight_spans(text: str, query: str) -> List[Tuple[int, int]]:
    """
    Every non-overlapping, case-insensitive occurrence of the trimmed query in
    `text`, as (start, end) offsets into the original string.
    """
    q = query.strip()
    if not q:
        return []
    pat = re.compile(re.escape(q), re.IGNORECASE)
    return [m.span() for m in pat.finditer(text)]

class SuggestionBox:
    """
    Suggestion list plus its visibility signal.

    The box opens when the search input gains focus or the user types a
    non-empty query, and closes when the UI reports focus leaving the search
    control (`set_visible(False)`) or when a suggestion is chosen. It is only
    `visible` while open AND holding at least one suggestion.
    """

    def __init__(self, universe: Sequence[str], cap: int = CFG.SUGGESTION_CAP) -> None:
        self.universe: List[str] = list(universe)
        self.cap = cap
        self.query: str = ""
        self.items: List[str] = []
        self._open = False

    @property
    def visible(self) -> bool:
        return self._open and bool(self.items)

    def update(self, query: str) -> List[str]:
        self.query = query
        self.items = suggest(self.universe, query, self.cap)
        self._open = bool(normalize_query(query))
        return self.items

    def focus(self) -> None:
        self._open = True

    def set_visible(self, flag: bool) -> None:
        self._open = bool(flag)

    def choose(self, text: str) -> str:
        """The chosen suggestion becomes the new query verbatim; the box hides."""
        self.query = text
        self.items = suggest(self.universe, text, self.cap)
        self._open = False
        return text

    def render(self, query: Optional[str] = None) -> List[Suggestion]:
        q = self.query if query is None else query
        return [Suggestion(text=s, spans=highlight_spans(s, q)) for s in self.items]
