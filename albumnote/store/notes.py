"""In-memory note store with a tag index kept in step with every mutation."""

from __future__ import annotations

import secrets
import threading
from collections.abc import Callable, Iterable

import structlog

from ..errors import NotFoundError, ValidationError
from ..models.notes import Note
from .clock import utc_now_iso
from .query import NOTE_MAX_LIMIT, NoteQuery, Page, compare_text, paginate, sort_items
from .tag_index import TagIndex
from .tags import MAX_TAG_LENGTH, MAX_TAGS_PER_NOTE, find_overlong, normalize_tag, normalize_tags

# Initialize logger
logger = structlog.get_logger(__name__)

NOTE_SORT_FIELDS = {"createdAt": "created_at", "updatedAt": "updated_at"}


def _tag_too_long(tag: str) -> ValidationError:
    return ValidationError(f'Tag "{tag}" exceeds {MAX_TAG_LENGTH} characters')


def _tag_limit_exceeded() -> ValidationError:
    return ValidationError(f"Tag limit exceeded: a note can have at most {MAX_TAGS_PER_NOTE} tags")


class NoteStore:
    """Owns the note collection and its tag index.

    Every operation validates completely before it writes, and the
    collection and index are only ever changed together under the store
    lock, so no caller can observe one without the other.
    """

    def __init__(self, clock: Callable[[], str] = utc_now_iso):
        self._clock = clock
        self._lock = threading.RLock()
        self._notes: dict[str, Note] = {}
        self._issued_ids: set[str] = set()
        self.tag_index: TagIndex[str] = TagIndex()

    def _new_id(self) -> str:
        while True:
            note_id = f"n_{secrets.token_hex(3)}"
            if note_id not in self._issued_ids:
                self._issued_ids.add(note_id)
                return note_id

    def _require(self, note_id: str) -> Note:
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    @staticmethod
    def _clean_content(content: str | None) -> str:
        cleaned = (content or "").strip()
        if not cleaned:
            raise ValidationError("Content cannot be empty")
        return cleaned

    def create(self, content: str | None, tags: Iterable[str] = ()) -> Note:
        """Create a note. Tag lengths are checked before the tag count."""
        cleaned = self._clean_content(content)

        raw = list(tags)
        overlong = find_overlong(normalize_tag(tag) for tag in raw)
        if overlong is not None:
            raise _tag_too_long(overlong)

        normalized = normalize_tags(raw)
        if len(normalized) > MAX_TAGS_PER_NOTE:
            raise _tag_limit_exceeded()

        with self._lock:
            now = self._clock()
            note = Note(
                id=self._new_id(),
                content=cleaned,
                tags=normalized,
                created_at=now,
                updated_at=now,
            )
            self._notes[note.id] = note
            for tag in normalized:
                self.tag_index.add(note.id, tag)

        logger.debug("note_stored", note_id=note.id, tags_count=len(normalized))
        return note.model_copy(deep=True)

    def get(self, note_id: str) -> Note:
        with self._lock:
            return self._require(note_id).model_copy(deep=True)

    def update_content(self, note_id: str, content: str | None) -> Note:
        with self._lock:
            note = self._require(note_id)
            cleaned = self._clean_content(content)
            note.content = cleaned
            note.updated_at = self._clock()
            return note.model_copy(deep=True)

    def add_tags(self, note_id: str, tags: Iterable[str]) -> Note:
        """Append genuinely new tags in the order supplied.

        Tags already on the note are ignored, so re-adding is a no-op and
        does not count toward the limit. When nothing is new the note is
        returned unchanged, ``updated_at`` included.
        """
        with self._lock:
            note = self._require(note_id)

            existing = set(note.tags)
            new_tags = [tag for tag in normalize_tags(tags) if tag not in existing]

            overlong = find_overlong(new_tags)
            if overlong is not None:
                raise _tag_too_long(overlong)
            if len(note.tags) + len(new_tags) > MAX_TAGS_PER_NOTE:
                raise _tag_limit_exceeded()

            if new_tags:
                note.tags.extend(new_tags)
                for tag in new_tags:
                    self.tag_index.add(note.id, tag)
                note.updated_at = self._clock()
                logger.debug("note_tags_added", note_id=note.id, tags=new_tags)

            return note.model_copy(deep=True)

    def remove_tag(self, note_id: str, tag: str) -> Note:
        with self._lock:
            note = self._require(note_id)

            normalized = normalize_tag(tag)
            if normalized not in note.tags:
                raise NotFoundError("Tag not found on this note")

            note.tags.remove(normalized)
            self.tag_index.remove(note.id, normalized)
            note.updated_at = self._clock()

            logger.debug("note_tag_removed", note_id=note.id, tag=normalized)
            return note.model_copy(deep=True)

    def delete(self, note_id: str) -> None:
        """Remove a note and purge its id from every tag bucket it was in."""
        with self._lock:
            note = self._require(note_id)
            del self._notes[note_id]
            for tag in note.tags:
                self.tag_index.remove(note_id, tag)

        logger.debug("note_removed", note_id=note_id, tags_count=len(note.tags))

    def query(self, query: NoteQuery) -> Page[Note]:
        """Run tag filter, content search, sort and pagination over the notes."""
        with self._lock:
            candidates = list(self._notes.values())

            if query.tag:
                bucket = self.tag_index.bucket_for(normalize_tag(query.tag))
                candidates = [note for note in candidates if note.id in bucket]

            if query.search:
                needle = query.search.lower()
                candidates = [note for note in candidates if needle in note.content.lower()]

            field = NOTE_SORT_FIELDS.get(query.sort, "created_at")
            ordered = sort_items(
                candidates,
                lambda a, b: compare_text(getattr(a, field), getattr(b, field)),
                query.order,
            )

            page = paginate(ordered, query.page, query.limit, max_limit=NOTE_MAX_LIMIT)
            page.items = [note.model_copy(deep=True) for note in page.items]
            return page

    def tag_counts(self) -> dict[str, int]:
        """Number of notes per tag in use."""
        with self._lock:
            return {tag: self.tag_index.count(tag) for tag in self.tag_index.distinct_tags()}

    def reset(self) -> None:
        """Drop every note and index entry. Issued ids stay retired."""
        with self._lock:
            self._notes.clear()
            self.tag_index.clear()

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes
