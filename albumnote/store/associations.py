"""Many-to-many membership table indexed in both directions."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, TypeVar

L = TypeVar("L", bound=Hashable)
R = TypeVar("R", bound=Hashable)


class JoinTable(Generic[L, R]):
    """Set of ``(left, right)`` pairs, e.g. ``(photo_id, album_id)``.

    Both directions are maintained incrementally on every insert and
    delete, and each side remembers insertion order (dicts are used as
    ordered sets). Empty per-key entries are pruned; the rows the keys
    refer to are owned elsewhere and are never touched.
    """

    def __init__(self):
        self._by_left: dict[L, dict[R, None]] = {}
        self._by_right: dict[R, dict[L, None]] = {}

    def add(self, left: L, right: R) -> bool:
        """Insert a pair. Returns False when it was already present."""
        rights = self._by_left.setdefault(left, {})
        if right in rights:
            return False
        rights[right] = None
        self._by_right.setdefault(right, {})[left] = None
        return True

    def remove(self, left: L, right: R) -> bool:
        """Delete a pair. Returns False when it was not present."""
        if right not in self._by_left.get(left, {}):
            return False
        self._discard(self._by_left, left, right)
        self._discard(self._by_right, right, left)
        return True

    def remove_left(self, left: L) -> None:
        """Delete every pair whose left side is ``left``."""
        for right in self._by_left.pop(left, {}):
            self._discard(self._by_right, right, left)

    def remove_right(self, right: R) -> None:
        """Delete every pair whose right side is ``right``."""
        for left in self._by_right.pop(right, {}):
            self._discard(self._by_left, left, right)

    def right_of(self, left: L) -> list[R]:
        """Right-hand keys paired with ``left``, oldest pairing first."""
        return list(self._by_left.get(left, ()))

    def left_of(self, right: R) -> list[L]:
        """Left-hand keys paired with ``right``, oldest pairing first."""
        return list(self._by_right.get(right, ()))

    def count_right(self, right: R) -> int:
        return len(self._by_right.get(right, ()))

    def __contains__(self, pair: object) -> bool:
        if not isinstance(pair, tuple) or len(pair) != 2:
            return False
        left, right = pair
        return right in self._by_left.get(left, {})

    def __len__(self) -> int:
        return sum(len(rights) for rights in self._by_left.values())

    def clear(self) -> None:
        self._by_left.clear()
        self._by_right.clear()

    @staticmethod
    def _discard(mapping: dict, key, member) -> None:
        members = mapping.get(key)
        if members is None:
            return
        members.pop(member, None)
        if not members:
            del mapping[key]
