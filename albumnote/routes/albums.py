"""Album endpoints: CRUD and photo membership."""

import structlog
from fastapi import APIRouter, Depends, Response

from ..models import Album, AlbumCreate, AlbumListResponse, AlbumPhotosAdd, AlbumResponse, AlbumUpdate
from ..observability import get_tracer
from ..store import PhotoStore
from .dependencies import body_or_empty, get_photo_store
from .photos import photo_url

# Initialize logger
logger = structlog.get_logger(__name__)

# Get tracer
tracer = get_tracer(__name__)

router = APIRouter(prefix="/albums", tags=["albums"])


def to_album_response(store: PhotoStore, album: Album) -> AlbumResponse:
    """Attach photo count and cover URL to an album."""
    cover = store.album_cover(album)
    return AlbumResponse(
        **album.model_dump(),
        photo_count=store.album_photo_count(album.id),
        cover_url=photo_url(cover) if cover is not None else None,
    )


@router.get("", response_model=AlbumListResponse)
async def list_albums(store: PhotoStore = Depends(get_photo_store)):
    """List albums with photo counts and cover URLs."""
    with tracer.start_as_current_span("list_albums") as span:
        albums = [to_album_response(store, album) for album in store.list_albums()]
        span.set_attribute("albums.count", len(albums))
        return AlbumListResponse(albums=albums)


@router.post("", response_model=AlbumResponse, status_code=201)
async def create_album(payload: AlbumCreate | None = None, store: PhotoStore = Depends(get_photo_store)):
    """Create an album. Names are unique (case-sensitive)."""
    with tracer.start_as_current_span("create_album") as span:
        payload = body_or_empty(payload, AlbumCreate)
        album = store.create_album(payload.name, payload.description)

        span.set_attribute("album.id", album.id)
        logger.info("album_created", album_id=album.id, name=album.name)

        return to_album_response(store, album)


@router.get("/{album_id}", response_model=AlbumResponse)
async def get_album(album_id: int, store: PhotoStore = Depends(get_photo_store)):
    """Retrieve one album."""
    with tracer.start_as_current_span("get_album") as span:
        span.set_attribute("album.id", album_id)
        return to_album_response(store, store.get_album(album_id))


@router.patch("/{album_id}", response_model=AlbumResponse)
async def update_album(
    album_id: int, payload: AlbumUpdate, store: PhotoStore = Depends(get_photo_store)
):
    """Rename an album, change its description or pick its cover photo."""
    with tracer.start_as_current_span("update_album") as span:
        span.set_attribute("album.id", album_id)

        album = store.update_album(album_id, payload)

        logger.info("album_updated", album_id=album_id, fields=sorted(payload.model_fields_set))
        return to_album_response(store, album)


@router.delete("/{album_id}", status_code=204)
async def delete_album(album_id: int, store: PhotoStore = Depends(get_photo_store)):
    """Delete an album. Its photos stay in the library."""
    with tracer.start_as_current_span("delete_album") as span:
        span.set_attribute("album.id", album_id)

        store.delete_album(album_id)

        logger.info("album_deleted", album_id=album_id)
        return Response(status_code=204)


@router.post("/{album_id}/photos", response_model=AlbumResponse)
async def add_album_photos(
    album_id: int, payload: AlbumPhotosAdd | None = None, store: PhotoStore = Depends(get_photo_store)
):
    """Add photos to an album. Unknown photo ids are ignored."""
    with tracer.start_as_current_span("add_album_photos") as span:
        span.set_attribute("album.id", album_id)
        payload = body_or_empty(payload, AlbumPhotosAdd)
        span.set_attribute("album.photos_requested", len(payload.photo_ids))

        album = store.add_photos_to_album(album_id, payload.photo_ids)

        logger.info("album_photos_added", album_id=album_id, photo_ids=payload.photo_ids)
        return to_album_response(store, album)


@router.delete("/{album_id}/photos/{photo_id}", status_code=204)
async def remove_album_photo(
    album_id: int, photo_id: int, store: PhotoStore = Depends(get_photo_store)
):
    """Remove a photo from an album."""
    with tracer.start_as_current_span("remove_album_photo") as span:
        span.set_attribute("album.id", album_id)
        span.set_attribute("photo.id", photo_id)

        store.remove_photo_from_album(album_id, photo_id)

        logger.info("album_photo_removed", album_id=album_id, photo_id=photo_id)
        return Response(status_code=204)
