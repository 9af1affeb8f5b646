"""Photo, album and photo-tag Pydantic models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .notes import require_array


class Photo(BaseModel):
    """A photo discovered by a directory scan."""

    id: int
    file_path: str
    file_name: str
    title: str | None = None
    description: str | None = None
    rating: int | None = None
    date_taken: str | None = None
    file_size: int | None = None
    width: int | None = None
    height: int | None = None
    mime_type: str | None = None
    created_at: str
    updated_at: str


class PhotoTag(BaseModel):
    """A durable photo tag row. Names are unique case-insensitively."""

    id: int
    name: str
    created_at: str


class Album(BaseModel):
    """An album. Names are unique case-sensitively."""

    id: int
    name: str
    description: str | None = None
    cover_photo_id: int | None = None
    created_at: str
    updated_at: str


class AlbumRef(BaseModel):
    id: int
    name: str


class PhotoResponse(Photo):
    """Photo plus its computed tag names, albums and asset URL."""

    tags: list[str] = Field(default_factory=list)
    albums: list[AlbumRef] = Field(default_factory=list)
    url: str


class PhotoListResponse(BaseModel):
    photos: list[PhotoResponse]
    total: int
    page: int
    limit: int


class PhotoUpdate(BaseModel):
    """Partial metadata update.

    Only fields present in the request body are applied; ``model_fields_set``
    is the presence flag, since ``null`` is a legitimate value for every
    field here. ``rating`` is validated by the store so that non-integer
    numbers are rejected rather than coerced.
    """

    title: str | None = None
    description: str | None = None
    rating: Any = None
    date_taken: str | None = None


class PhotoTagsAdd(BaseModel):
    tags: list[str] = Field(default=None, validate_default=True)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_must_be_array(cls, value):
        return require_array(value, "tags")


class AlbumCreate(BaseModel):
    name: str | None = None
    description: str | None = None


class AlbumUpdate(BaseModel):
    """Partial album update; presence is tracked through ``model_fields_set``."""

    name: str | None = None
    description: str | None = None
    cover_photo_id: int | None = None


class AlbumPhotosAdd(BaseModel):
    photo_ids: list[int] = Field(default=None, validate_default=True)

    @field_validator("photo_ids", mode="before")
    @classmethod
    def photo_ids_must_be_array(cls, value):
        return require_array(value, "photo_ids")


class AlbumResponse(Album):
    photo_count: int
    cover_url: str | None = None


class AlbumListResponse(BaseModel):
    albums: list[AlbumResponse]


class TagSummary(BaseModel):
    """Per-domain usage of one tag name."""

    name: str
    noteCount: int
    photoCount: int


class TagListResponse(BaseModel):
    tags: list[TagSummary]


class ScanResponse(BaseModel):
    added: int
    removed: int
    total: int
