"""Photo endpoints: listing, metadata edits and tagging."""

import structlog
from fastapi import APIRouter, Depends, Response

from ..config import Settings
from ..models import (
    AlbumRef,
    Photo,
    PhotoListResponse,
    PhotoResponse,
    PhotoTagsAdd,
    PhotoUpdate,
)
from ..observability import get_tracer
from ..store import PhotoQuery, PhotoStore
from .dependencies import body_or_empty, get_photo_store, get_settings

# Initialize logger
logger = structlog.get_logger(__name__)

# Get tracer
tracer = get_tracer(__name__)

router = APIRouter(prefix="/photos", tags=["photos"])


def photo_url(photo: Photo) -> str:
    return f"/photos/{photo.file_path}"


def to_photo_response(store: PhotoStore, photo: Photo) -> PhotoResponse:
    """Attach computed tags, albums and asset URL to a photo."""
    return PhotoResponse(
        **photo.model_dump(),
        tags=store.tags_for(photo.id),
        albums=[AlbumRef(id=album.id, name=album.name) for album in store.albums_for(photo.id)],
        url=photo_url(photo),
    )


@router.get("", response_model=PhotoListResponse)
async def list_photos(
    album_id: int | None = None,
    tag: str | None = None,
    search: str | None = None,
    sort: str = "date",
    order: str = "desc",
    page: int = 1,
    limit: int | None = None,
    store: PhotoStore = Depends(get_photo_store),
    settings: Settings = Depends(get_settings),
):
    """
    List photos.

    Optionally scoped to an album, filtered by tag (case-insensitive) and by
    a substring of title, description or file name. Sorts by date, name or
    rating. The page size is not capped.
    """
    with tracer.start_as_current_span("list_photos") as span:
        query = PhotoQuery(
            album_id=album_id,
            tag=tag,
            search=search,
            sort=sort,
            order=order,
            page=page,
            limit=limit if limit is not None else settings.photos_default_limit,
        )
        span.set_attribute("query.page", query.page)
        span.set_attribute("query.limit", query.limit)

        result = store.query(query)

        span.set_attribute("photos.count", len(result.items))
        span.set_attribute("photos.total", result.total)
        logger.info("photos_listed", count=len(result.items), total=result.total)

        return PhotoListResponse(
            photos=[to_photo_response(store, photo) for photo in result.items],
            total=result.total,
            page=result.page,
            limit=result.limit,
        )


@router.get("/{photo_id}", response_model=PhotoResponse)
async def get_photo(photo_id: int, store: PhotoStore = Depends(get_photo_store)):
    """Retrieve a photo with its tags and albums."""
    with tracer.start_as_current_span("get_photo") as span:
        span.set_attribute("photo.id", photo_id)
        return to_photo_response(store, store.get_photo(photo_id))


@router.patch("/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    photo_id: int, update: PhotoUpdate, store: PhotoStore = Depends(get_photo_store)
):
    """
    Update photo metadata.

    Only fields present in the body are applied; ``null`` clears a field.
    Rating must be an integer from 1 to 5.
    """
    with tracer.start_as_current_span("update_photo") as span:
        span.set_attribute("photo.id", photo_id)

        photo = store.update_photo(photo_id, update)

        logger.info("photo_updated", photo_id=photo_id, fields=sorted(update.model_fields_set))
        return to_photo_response(store, photo)


@router.post("/{photo_id}/tags", response_model=PhotoResponse)
async def add_photo_tags(
    photo_id: int, payload: PhotoTagsAdd | None = None, store: PhotoStore = Depends(get_photo_store)
):
    """Tag a photo by name, reusing existing tag rows case-insensitively."""
    with tracer.start_as_current_span("add_photo_tags") as span:
        span.set_attribute("photo.id", photo_id)
        payload = body_or_empty(payload, PhotoTagsAdd)
        span.set_attribute("photo.tags_requested", len(payload.tags))

        photo = store.add_tags(photo_id, payload.tags)

        logger.info("photo_tags_added", photo_id=photo_id, tags=payload.tags)
        return to_photo_response(store, photo)


@router.delete("/{photo_id}/tags/{name:path}", status_code=204)
async def remove_photo_tag(photo_id: int, name: str, store: PhotoStore = Depends(get_photo_store)):
    """Untag a photo. The tag row is kept even if no photo uses it any more."""
    with tracer.start_as_current_span("remove_photo_tag") as span:
        span.set_attribute("photo.id", photo_id)

        store.remove_tag(photo_id, name)

        logger.info("photo_tag_removed", photo_id=photo_id, tag=name)
        return Response(status_code=204)
