"""Filter -> search -> sort -> paginate pipeline shared by the list endpoints."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

Comparator = Callable[[T, T], int]

NOTE_MAX_LIMIT = 100


@dataclass
class Page(Generic[T]):
    """One page of results plus the pre-pagination total."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 0


class NoteQuery(BaseModel):
    tag: str | None = None
    search: str | None = None
    sort: str = "createdAt"
    order: str = "desc"
    page: int = 1
    limit: int = 20


class PhotoQuery(BaseModel):
    album_id: int | None = None
    tag: str | None = None
    search: str | None = None
    sort: str = "date"
    order: str = "desc"
    page: int = 1
    limit: int = 50


def compare_text(a: str, b: str) -> int:
    """Plain code-point comparison; ISO-8601 timestamps sort correctly this way."""
    return (a > b) - (a < b)


def collation_key(text: str) -> tuple[str, str, str]:
    """Sort key that orders letters before accents before case.

    Primary: accents stripped and casefolded, so "éclair" sorts among the e's.
    Secondary: casefolded with accents kept. Tertiary: the raw string.
    """
    folded = text.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, unicodedata.normalize("NFC", folded), text


def compare_locale(a: str, b: str) -> int:
    """Natural-language comparison of display names."""
    key_a, key_b = collation_key(a), collation_key(b)
    return (key_a > key_b) - (key_a < key_b)


def compare_numbers(a: float, b: float) -> int:
    return (a > b) - (a < b)


def resolve_order(order: str | None) -> Literal["asc", "desc"]:
    return "asc" if order == "asc" else "desc"


def sort_items(items: Sequence[T], compare: Comparator, order: str | None) -> list[T]:
    """Stable sort. Descending negates the ascending comparator so ties keep input order."""
    if resolve_order(order) == "asc":
        comparator = compare
    else:
        def comparator(a, b):
            return -compare(a, b)

    return sorted(items, key=cmp_to_key(comparator))


def paginate(items: Sequence[T], page: int, limit: int, max_limit: int | None = None) -> Page[T]:
    """Slice ``[(page-1)*limit, page*limit)``. Out-of-range pages are empty, never an error."""
    page = max(page, 1)
    limit = max(limit, 1)
    if max_limit is not None:
        limit = min(limit, max_limit)

    start = (page - 1) * limit
    return Page(items=list(items[start : start + limit]), total=len(items), page=page, limit=limit)


def contains_text(value: str | None, needle: str) -> bool:
    """Case-insensitive substring test; missing values never match."""
    return value is not None and needle in value.lower()
