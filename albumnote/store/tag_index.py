"""Secondary index from tag name to the ids of the entities carrying it."""

from __future__ import annotations

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

IdT = TypeVar("IdT", bound=Hashable)


class TagIndex(Generic[IdT]):
    """Mapping of tag -> set of entity ids.

    Buckets never persist empty: removing the last member of a tag deletes
    the bucket, so ``distinct_tags()`` and ``tag in index`` need no extra
    bookkeeping.
    """

    def __init__(self):
        self._buckets: dict[str, set[IdT]] = {}

    def add(self, entity_id: IdT, tag: str) -> None:
        """Insert ``entity_id`` into the bucket for ``tag``. Idempotent."""
        self._buckets.setdefault(tag, set()).add(entity_id)

    def remove(self, entity_id: IdT, tag: str) -> None:
        """Remove ``entity_id`` from the bucket for ``tag``, pruning it when empty."""
        bucket = self._buckets.get(tag)
        if bucket is None:
            return
        bucket.discard(entity_id)
        if not bucket:
            del self._buckets[tag]

    def bucket_for(self, tag: str) -> frozenset[IdT]:
        """Exact-match lookup. Unknown tags yield an empty set."""
        return frozenset(self._buckets.get(tag, ()))

    def count(self, tag: str) -> int:
        return len(self._buckets.get(tag, ()))

    def distinct_tags(self) -> Iterator[str]:
        """Yield every tag that currently has at least one member."""
        for tag in list(self._buckets):
            yield tag

    def clear(self) -> None:
        self._buckets.clear()

    def __contains__(self, tag: object) -> bool:
        return tag in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)
