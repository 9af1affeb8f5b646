"""Note tag normalization."""

from __future__ import annotations

from collections.abc import Iterable

MAX_TAG_LENGTH = 32
MAX_TAGS_PER_NOTE = 10


def normalize_tag(tag: str) -> str:
    """Trim and lowercase a tag. May return an empty string."""
    return tag.strip().lower()


def normalize_tags(tags: Iterable[str]) -> list[str]:
    """Normalize a tag list, dropping empties and later duplicates.

    First-occurrence order is preserved, so ``["Work", " work ", "todo"]``
    becomes ``["work", "todo"]``. Length is not checked here.
    """
    seen: set[str] = set()
    result: list[str] = []
    for tag in tags:
        normalized = normalize_tag(tag)
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        result.append(normalized)
    return result


def find_overlong(tags: Iterable[str]) -> str | None:
    """Return the first tag longer than ``MAX_TAG_LENGTH``, if any."""
    for tag in tags:
        if len(tag) > MAX_TAG_LENGTH:
            return tag
    return None
