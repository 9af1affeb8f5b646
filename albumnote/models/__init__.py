"""Pydantic models for API requests and responses."""

from .notes import Note, NoteCreate, NoteListResponse, NoteTagsAdd, NoteUpdate
from .photos import (
    Album,
    AlbumCreate,
    AlbumListResponse,
    AlbumPhotosAdd,
    AlbumRef,
    AlbumResponse,
    AlbumUpdate,
    Photo,
    PhotoListResponse,
    PhotoResponse,
    PhotoTag,
    PhotoTagsAdd,
    PhotoUpdate,
    ScanResponse,
    TagListResponse,
    TagSummary,
)

__all__ = [
    # Notes models
    "Note",
    "NoteCreate",
    "NoteListResponse",
    "NoteTagsAdd",
    "NoteUpdate",
    # Photo models
    "Photo",
    "PhotoListResponse",
    "PhotoResponse",
    "PhotoTag",
    "PhotoTagsAdd",
    "PhotoUpdate",
    "ScanResponse",
    # Album models
    "Album",
    "AlbumCreate",
    "AlbumListResponse",
    "AlbumPhotosAdd",
    "AlbumRef",
    "AlbumResponse",
    "AlbumUpdate",
    # Tag models
    "TagListResponse",
    "TagSummary",
]
