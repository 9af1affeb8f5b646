"""API route handlers organized by domain."""

from .albums import router as albums_router
from .health import router as health_router
from .notes import router as notes_router
from .photos import router as photos_router
from .scan import router as scan_router
from .tags import router as tags_router

__all__ = [
    "albums_router",
    "health_router",
    "notes_router",
    "photos_router",
    "scan_router",
    "tags_router",
]
