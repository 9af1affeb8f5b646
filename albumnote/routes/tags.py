"""Combined tag listing across notes and photos."""

import structlog
from fastapi import APIRouter, Depends

from ..models import TagListResponse, TagSummary
from ..observability import get_tracer
from ..store import NoteStore, PhotoStore
from .dependencies import get_note_store, get_photo_store

# Initialize logger
logger = structlog.get_logger(__name__)

# Get tracer
tracer = get_tracer(__name__)

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagListResponse)
async def list_tags(
    notes: NoteStore = Depends(get_note_store),
    photos: PhotoStore = Depends(get_photo_store),
):
    """
    List every tag name with its note and photo usage.

    Note tags and photo tag rows are merged by lowercase name. Photo tag
    rows stay listed after their last photo is untagged; note tags vanish
    with their last note.
    """
    with tracer.start_as_current_span("list_tags") as span:
        merged: dict[str, TagSummary] = {}

        for name, count in notes.tag_counts().items():
            merged[name] = TagSummary(name=name, noteCount=count, photoCount=0)

        for name, count in photos.tag_counts().items():
            key = name.lower()
            if key in merged:
                merged[key].photoCount = count
            else:
                merged[key] = TagSummary(name=name, noteCount=0, photoCount=count)

        tags = [merged[key] for key in sorted(merged)]

        span.set_attribute("tags.count", len(tags))
        logger.info("tags_listed", count=len(tags))

        return TagListResponse(tags=tags)
