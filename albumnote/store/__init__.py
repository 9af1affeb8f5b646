"""In-memory stores for notes and photos."""

from .notes import NoteStore
from .photos import PhotoStore, ScannedFile, ScanResult
from .query import NoteQuery, Page, PhotoQuery
from .tag_index import TagIndex

__all__ = [
    "NoteQuery",
    "NoteStore",
    "Page",
    "PhotoQuery",
    "PhotoStore",
    "ScanResult",
    "ScannedFile",
    "TagIndex",
]
