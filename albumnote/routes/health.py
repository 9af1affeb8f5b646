"""Liveness and library status endpoints."""

import structlog
from fastapi import APIRouter, Depends

from ..config import Settings
from ..store import NoteStore, PhotoStore
from .dependencies import get_note_store, get_photo_store, get_settings

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/")
async def root(settings: Settings = Depends(get_settings)):
    """Point clients at the JSON API and the photo file mount."""
    return {
        "service": "albumnote",
        "api": settings.api_prefix,
        "photos": "/photos" if settings.serve_photos else None,
    }


@router.get("/health")
async def health(
    notes: NoteStore = Depends(get_note_store),
    photos: PhotoStore = Depends(get_photo_store),
    settings: Settings = Depends(get_settings),
):
    """
    Report store sizes and whether the photos directory can be scanned.

    A missing photos directory does not make the service unhealthy; it only
    means the next scan will fail.
    """
    photos_dir_present = settings.photos_dir.is_dir()
    if not photos_dir_present:
        logger.warning("photos_dir_missing", photos_dir=str(settings.photos_dir))

    return {
        "status": "healthy",
        "notes": len(notes),
        "photos": len(photos),
        "photos_dir": str(settings.photos_dir),
        "photos_dir_present": photos_dir_present,
    }
