"""Notes endpoints."""

import structlog
from fastapi import APIRouter, Depends, Response

from ..config import Settings
from ..models import Note, NoteCreate, NoteListResponse, NoteTagsAdd, NoteUpdate
from ..observability import get_app_metrics, get_tracer
from ..store import NoteQuery, NoteStore
from .dependencies import body_or_empty, get_note_store, get_settings

# Initialize logger
logger = structlog.get_logger(__name__)

# Get tracer
tracer = get_tracer(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=NoteListResponse)
async def list_notes(
    tag: str | None = None,
    search: str | None = None,
    sort: str = "createdAt",
    order: str = "desc",
    page: int = 1,
    limit: int | None = None,
    store: NoteStore = Depends(get_note_store),
    settings: Settings = Depends(get_settings),
):
    """
    List notes.

    Filters by tag (exact, after normalization) and by a case-insensitive
    content substring, sorts by createdAt or updatedAt, and paginates.
    The page size is capped at 100.
    """
    with tracer.start_as_current_span("list_notes") as span:
        query = NoteQuery(
            tag=tag,
            search=search,
            sort=sort,
            order=order,
            page=page,
            limit=limit if limit is not None else settings.notes_default_limit,
        )
        span.set_attribute("query.page", query.page)
        span.set_attribute("query.limit", query.limit)
        if tag:
            span.set_attribute("query.tag", tag)

        result = store.query(query)

        span.set_attribute("notes.count", len(result.items))
        span.set_attribute("notes.total", result.total)
        logger.info("notes_listed", count=len(result.items), total=result.total)

        return NoteListResponse(
            notes=result.items, total=result.total, page=result.page, limit=result.limit
        )


@router.post("", response_model=Note, status_code=201)
async def create_note(note: NoteCreate | None = None, store: NoteStore = Depends(get_note_store)):
    """
    Create a note.

    Tags are trimmed, lowercased and deduplicated; a note holds at most
    10 tags of at most 32 characters each.
    """
    with tracer.start_as_current_span("create_note") as span:
        note = body_or_empty(note, NoteCreate)
        span.set_attribute("note.tags_count", len(note.tags))

        created = store.create(note.content, note.tags)

        span.set_attribute("note.id", created.id)
        get_app_metrics().notes_created.add(1)
        logger.info("note_created", note_id=created.id, tags=created.tags)

        return created


@router.get("/{note_id}", response_model=Note)
async def get_note(note_id: str, store: NoteStore = Depends(get_note_store)):
    """Retrieve a specific note by ID."""
    with tracer.start_as_current_span("get_note") as span:
        span.set_attribute("note.id", note_id)
        return store.get(note_id)


@router.patch("/{note_id}", response_model=Note)
async def update_note(
    note_id: str, note_update: NoteUpdate, store: NoteStore = Depends(get_note_store)
):
    """
    Update note content.

    An empty body leaves the note untouched. Tags are never changed here.
    """
    with tracer.start_as_current_span("update_note") as span:
        span.set_attribute("note.id", note_id)

        if "content" not in note_update.model_fields_set:
            logger.info("update_note_no_changes", note_id=note_id)
            return store.get(note_id)

        updated = store.update_content(note_id, note_update.content)

        span.set_attribute("note.content_updated", True)
        logger.info("note_updated", note_id=note_id)

        return updated


@router.delete("/{note_id}", status_code=204)
async def delete_note(note_id: str, store: NoteStore = Depends(get_note_store)):
    """Delete a note permanently and drop it from every tag it carried."""
    with tracer.start_as_current_span("delete_note") as span:
        span.set_attribute("note.id", note_id)

        store.delete(note_id)

        get_app_metrics().notes_deleted.add(1)
        logger.info("note_deleted", note_id=note_id)

        return Response(status_code=204)


@router.post("/{note_id}/tags", response_model=Note)
async def add_note_tags(
    note_id: str, payload: NoteTagsAdd | None = None, store: NoteStore = Depends(get_note_store)
):
    """Attach tags to a note. Tags already present are ignored."""
    with tracer.start_as_current_span("add_note_tags") as span:
        span.set_attribute("note.id", note_id)
        payload = body_or_empty(payload, NoteTagsAdd)

        before = store.get(note_id)
        updated = store.add_tags(note_id, payload.tags)
        added = len(updated.tags) - len(before.tags)

        span.set_attribute("note.tags_added", added)
        get_app_metrics().note_tags_added.add(added)
        logger.info("note_tags_added", note_id=note_id, added=added)

        return updated


@router.delete("/{note_id}/tags/{tag:path}", response_model=Note)
async def remove_note_tag(note_id: str, tag: str, store: NoteStore = Depends(get_note_store)):
    """Remove one tag from a note. The path segment arrives URL-decoded; matching is case-insensitive."""
    with tracer.start_as_current_span("remove_note_tag") as span:
        span.set_attribute("note.id", note_id)

        updated = store.remove_tag(note_id, tag)

        logger.info("note_tag_removed", note_id=note_id, tag=tag)
        return updated
