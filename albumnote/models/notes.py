"""Notes-related Pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def require_array(value, field_name: str):
    """Reject anything that is not a JSON array with a client-readable message."""
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be an array")
    return value


class Note(BaseModel):
    """A note and its ordered tag list. Serialized with camelCase timestamps."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    tags: list[str] = Field(default_factory=list)
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class NoteCreate(BaseModel):
    """Request model for creating a note."""

    content: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_must_be_array(cls, value):
        return require_array(value, "tags")


class NoteUpdate(BaseModel):
    """Request model for updating note content. Absent content means no change."""

    content: str | None = None


class NoteTagsAdd(BaseModel):
    """Request model for attaching tags to a note."""

    tags: list[str] = Field(default=None, validate_default=True)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_must_be_array(cls, value):
        return require_array(value, "tags")


class NoteListResponse(BaseModel):
    """Response model for a page of notes."""

    notes: list[Note]
    total: int
    page: int
    limit: int
