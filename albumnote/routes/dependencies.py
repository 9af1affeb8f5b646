"""Request-scoped accessors for the per-application stores."""

from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel

from ..config import Settings
from ..store import NoteStore, PhotoStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_note_store(request: Request) -> NoteStore:
    return request.app.state.notes


def get_photo_store(request: Request) -> PhotoStore:
    return request.app.state.photos


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def body_or_empty(payload: ModelT | None, model: type[ModelT]) -> ModelT:
    """Validate a missing request body as ``{}`` so the model's own messages apply."""
    return payload if payload is not None else model.model_validate({})
