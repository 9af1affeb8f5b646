"""Directory scan endpoint."""

import structlog
from fastapi import APIRouter, Depends

from ..config import Settings
from ..errors import InternalError
from ..models import ScanResponse
from ..observability import get_app_metrics, get_tracer
from ..services.scanner import scan_directory
from ..store import PhotoStore
from .dependencies import get_photo_store, get_settings

# Initialize logger
logger = structlog.get_logger(__name__)

# Get tracer
tracer = get_tracer(__name__)

router = APIRouter(tags=["scan"])


@router.post("/scan", response_model=ScanResponse)
async def scan(
    store: PhotoStore = Depends(get_photo_store),
    settings: Settings = Depends(get_settings),
):
    """
    Reconcile the photo library with the photos directory.

    The directory listing is gathered first; the store is only changed once
    it is complete, so a failed scan leaves the library as it was.
    """
    with tracer.start_as_current_span("scan_photos") as span:
        span.set_attribute("scan.root", str(settings.photos_dir))
        metrics = get_app_metrics()

        try:
            scanned = await scan_directory(settings.photos_dir)
        except OSError as e:
            metrics.scans_failed.add(1)
            span.set_attribute("error", True)
            logger.error("scan_failed", root=str(settings.photos_dir), error=str(e))
            raise InternalError(f"Failed to scan directory: {e}") from e

        result = store.reconcile(scanned)

        metrics.scans_completed.add(1)
        metrics.photos_added.add(result.added)
        metrics.photos_removed.add(result.removed)
        span.set_attribute("scan.added", result.added)
        span.set_attribute("scan.removed", result.removed)

        return ScanResponse(added=result.added, removed=result.removed, total=result.total)
