"""In-memory photo store: photos, durable tag rows, albums and their join tables."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import structlog

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models.photos import Album, AlbumUpdate, Photo, PhotoTag, PhotoUpdate
from .associations import JoinTable
from .clock import utc_now_iso
from .query import (
    Page,
    PhotoQuery,
    compare_locale,
    compare_numbers,
    compare_text,
    contains_text,
    paginate,
    sort_items,
)

# Initialize logger
logger = structlog.get_logger(__name__)


def _compare_date(a: Photo, b: Photo) -> int:
    return compare_text(a.created_at or "", b.created_at or "")


def _compare_name(a: Photo, b: Photo) -> int:
    return compare_locale(a.file_name, b.file_name)


def _compare_rating(a: Photo, b: Photo) -> int:
    return compare_numbers(a.rating or 0, b.rating or 0)


PHOTO_COMPARATORS = {
    "date": _compare_date,
    "name": _compare_name,
    "rating": _compare_rating,
}


@dataclass(frozen=True)
class ScannedFile:
    """One image file reported by a directory scan."""

    file_path: str
    file_name: str
    file_size: int | None = None
    mime_type: str | None = None


@dataclass(frozen=True)
class ScanResult:
    added: int
    removed: int
    total: int


def validate_rating(rating) -> int | None:
    """Accept ``None`` or an integer in [1, 5]; reject everything else."""
    if rating is None:
        return None
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    return rating


class PhotoStore:
    """Owns photos, photo tag rows, albums and the photo<->album/tag joins.

    Photo tag rows are durable identifiers: removing the last photo from a
    tag leaves the row in place. Album and photo deletion cascade to the
    join tables only.
    """

    def __init__(self, clock: Callable[[], str] = utc_now_iso):
        self._clock = clock
        self._lock = threading.RLock()

        self._photos: dict[int, Photo] = {}
        self._paths: dict[str, int] = {}
        self._tags: dict[int, PhotoTag] = {}
        self._tag_ids_by_name: dict[str, int] = {}
        self._albums: dict[int, Album] = {}

        self.photo_albums: JoinTable[int, int] = JoinTable()
        self.photo_tags: JoinTable[int, int] = JoinTable()

        self._next_photo_id = 1
        self._next_tag_id = 1
        self._next_album_id = 1

    # -- photos -----------------------------------------------------------

    def _require_photo(self, photo_id: int) -> Photo:
        photo = self._photos.get(photo_id)
        if photo is None:
            raise NotFoundError("Photo not found")
        return photo

    def get_photo(self, photo_id: int) -> Photo:
        with self._lock:
            return self._require_photo(photo_id).model_copy()

    def update_photo(self, photo_id: int, update: PhotoUpdate) -> Photo:
        """Apply the fields present in ``update``."""
        with self._lock:
            photo = self._require_photo(photo_id)
            changes = {name: getattr(update, name) for name in update.model_fields_set}
            if "rating" in changes:
                changes["rating"] = validate_rating(changes["rating"])

            if changes:
                for name, value in changes.items():
                    setattr(photo, name, value)
                photo.updated_at = self._clock()
                logger.debug("photo_updated", photo_id=photo_id, fields=sorted(changes))

            return photo.model_copy()

    def query(self, query: PhotoQuery) -> Page[Photo]:
        """Album scope, tag filter, text search, sort, then paginate."""
        with self._lock:
            candidates = list(self._photos.values())

            if query.album_id is not None:
                members = set(self.photo_albums.left_of(query.album_id))
                candidates = [photo for photo in candidates if photo.id in members]

            if query.tag:
                tag = self.find_tag(query.tag)
                if tag is None:
                    candidates = []
                else:
                    members = set(self.photo_tags.left_of(tag.id))
                    candidates = [photo for photo in candidates if photo.id in members]

            if query.search:
                needle = query.search.lower()
                candidates = [
                    photo
                    for photo in candidates
                    if contains_text(photo.title, needle)
                    or contains_text(photo.description, needle)
                    or contains_text(photo.file_name, needle)
                ]

            compare = PHOTO_COMPARATORS.get(query.sort, _compare_date)
            ordered = sort_items(candidates, compare, query.order)

            page = paginate(ordered, query.page, query.limit)
            page.items = [photo.model_copy() for photo in page.items]
            return page

    def __len__(self) -> int:
        return len(self._photos)

    # -- tags -------------------------------------------------------------

    def find_tag(self, name: str) -> PhotoTag | None:
        """Case-insensitive tag row lookup."""
        tag_id = self._tag_ids_by_name.get(name.strip().lower())
        return self._tags[tag_id] if tag_id is not None else None

    def _get_or_create_tag(self, name: str) -> PhotoTag:
        tag = self.find_tag(name)
        if tag is None:
            tag = PhotoTag(id=self._next_tag_id, name=name, created_at=self._clock())
            self._next_tag_id += 1
            self._tags[tag.id] = tag
            self._tag_ids_by_name[name.lower()] = tag.id
            logger.debug("photo_tag_created", tag_id=tag.id, name=name)
        return tag

    def add_tags(self, photo_id: int, names: Iterable[str]) -> Photo:
        """Attach tags by name, reusing existing rows. Blank names are skipped."""
        with self._lock:
            photo = self._require_photo(photo_id)
            for raw in names:
                name = raw.strip()
                if not name:
                    continue
                tag = self._get_or_create_tag(name)
                self.photo_tags.add(photo.id, tag.id)
            return photo.model_copy()

    def remove_tag(self, photo_id: int, name: str) -> None:
        """Detach a tag from a photo. The tag row itself is kept."""
        with self._lock:
            photo = self._require_photo(photo_id)
            tag = self.find_tag(name)
            if tag is not None:
                self.photo_tags.remove(photo.id, tag.id)

    def tags_for(self, photo_id: int) -> list[str]:
        """Tag names on a photo, ordered by tag creation."""
        with self._lock:
            return [self._tags[tag_id].name for tag_id in sorted(self.photo_tags.right_of(photo_id))]

    def list_tags(self) -> list[PhotoTag]:
        with self._lock:
            return [tag.model_copy() for tag in self._tags.values()]

    def tag_counts(self) -> dict[str, int]:
        """Number of photos per tag row, including rows no photo uses any more."""
        with self._lock:
            return {tag.name: self.photo_tags.count_right(tag.id) for tag in self._tags.values()}

    # -- albums -----------------------------------------------------------

    def _require_album(self, album_id: int) -> Album:
        album = self._albums.get(album_id)
        if album is None:
            raise NotFoundError("Album not found")
        return album

    def _check_album_name(self, name: str | None, album_id: int | None = None) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError("Album name is required")
        for album in self._albums.values():
            if album.name == cleaned and album.id != album_id:
                raise ConflictError("Album name already exists")
        return cleaned

    def get_album(self, album_id: int) -> Album:
        with self._lock:
            return self._require_album(album_id).model_copy()

    def list_albums(self) -> list[Album]:
        with self._lock:
            return [album.model_copy() for album in self._albums.values()]

    def create_album(self, name: str | None, description: str | None = None) -> Album:
        with self._lock:
            cleaned = self._check_album_name(name)
            now = self._clock()
            album = Album(
                id=self._next_album_id,
                name=cleaned,
                description=description or None,
                created_at=now,
                updated_at=now,
            )
            self._next_album_id += 1
            self._albums[album.id] = album
            logger.debug("album_stored", album_id=album.id, name=cleaned)
            return album.model_copy()

    def update_album(self, album_id: int, update: AlbumUpdate) -> Album:
        """Rename, redescribe or set the cover of an album.

        Everything is validated before the album is touched.
        """
        with self._lock:
            album = self._require_album(album_id)
            fields = update.model_fields_set

            changes = {}
            if "name" in fields:
                changes["name"] = self._check_album_name(update.name, album_id=album.id)
            if "description" in fields:
                changes["description"] = update.description
            if "cover_photo_id" in fields:
                if update.cover_photo_id is not None:
                    self._require_photo(update.cover_photo_id)
                changes["cover_photo_id"] = update.cover_photo_id

            if changes:
                for name, value in changes.items():
                    setattr(album, name, value)
                album.updated_at = self._clock()
                logger.debug("album_updated", album_id=album.id, fields=sorted(changes))

            return album.model_copy()

    def delete_album(self, album_id: int) -> None:
        """Delete an album and its memberships. Photos are untouched."""
        with self._lock:
            self._require_album(album_id)
            del self._albums[album_id]
            self.photo_albums.remove_right(album_id)

    def add_photos_to_album(self, album_id: int, photo_ids: Iterable[int]) -> Album:
        """Add known photos to an album; unknown ids and existing members are skipped."""
        with self._lock:
            album = self._require_album(album_id)
            for photo_id in photo_ids:
                if photo_id in self._photos:
                    self.photo_albums.add(photo_id, album.id)
            return album.model_copy()

    def remove_photo_from_album(self, album_id: int, photo_id: int) -> None:
        with self._lock:
            self._require_album(album_id)
            self.photo_albums.remove(photo_id, album_id)

    def album_photo_count(self, album_id: int) -> int:
        with self._lock:
            return self.photo_albums.count_right(album_id)

    def album_cover(self, album: Album) -> Photo | None:
        """Explicit cover photo, else the first photo added to the album."""
        with self._lock:
            if album.cover_photo_id is not None:
                cover = self._photos.get(album.cover_photo_id)
            else:
                members = self.photo_albums.left_of(album.id)
                cover = self._photos.get(members[0]) if members else None
            return cover.model_copy() if cover is not None else None

    def albums_for(self, photo_id: int) -> list[Album]:
        """Albums containing a photo, ordered by album id."""
        with self._lock:
            return [
                self._albums[album_id].model_copy()
                for album_id in sorted(self.photo_albums.right_of(photo_id))
            ]

    # -- reconciliation ---------------------------------------------------

    def reconcile(self, scanned: Iterable[ScannedFile]) -> ScanResult:
        """Sync photos with a directory listing.

        New paths become photos with empty metadata; known paths missing from
        the listing are deleted along with their album and tag memberships.
        The diff is fully computed before anything is written.
        """
        scanned = list(scanned)
        with self._lock:
            scanned_paths = {entry.file_path for entry in scanned}

            to_add: list[ScannedFile] = []
            queued: set[str] = set()
            for entry in scanned:
                if entry.file_path in self._paths or entry.file_path in queued:
                    continue
                queued.add(entry.file_path)
                to_add.append(entry)

            to_remove = [photo.id for photo in self._photos.values() if photo.file_path not in scanned_paths]

            for entry in to_add:
                now = self._clock()
                photo = Photo(
                    id=self._next_photo_id,
                    file_path=entry.file_path,
                    file_name=entry.file_name,
                    file_size=entry.file_size,
                    mime_type=entry.mime_type,
                    created_at=now,
                    updated_at=now,
                )
                self._next_photo_id += 1
                self._photos[photo.id] = photo
                self._paths[photo.file_path] = photo.id

            for photo_id in to_remove:
                self._remove_photo(photo_id)

            result = ScanResult(added=len(to_add), removed=len(to_remove), total=len(self._photos))

        logger.info("photos_reconciled", added=result.added, removed=result.removed, total=result.total)
        return result

    def _remove_photo(self, photo_id: int) -> None:
        photo = self._photos.pop(photo_id)
        del self._paths[photo.file_path]
        self.photo_albums.remove_left(photo_id)
        self.photo_tags.remove_left(photo_id)
        for album in self._albums.values():
            if album.cover_photo_id == photo_id:
                album.cover_photo_id = None
