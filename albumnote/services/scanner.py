"""Recursive image directory scanner."""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path

import structlog

from ..store.photos import ScannedFile

logger = structlog.get_logger(__name__)

IMAGE_RE = re.compile(r"\.(jpe?g|png|gif|webp|avif)$", re.IGNORECASE)

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".avif": "image/avif",
}


def get_mime_type(file_name: str) -> str:
    return MIME_TYPES.get(Path(file_name).suffix.lower(), "application/octet-stream")


def _walk(root: Path) -> list[ScannedFile]:
    if not root.is_dir():
        raise FileNotFoundError(f"Photos directory not found: {root}")

    def raise_error(error: OSError):
        raise error

    files: list[ScannedFile] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=raise_error):
        dirnames.sort()
        for name in sorted(filenames):
            if not IMAGE_RE.search(name):
                continue
            full_path = Path(dirpath) / name
            files.append(
                ScannedFile(
                    file_path=full_path.relative_to(root).as_posix(),
                    file_name=name,
                    file_size=full_path.stat().st_size,
                    mime_type=get_mime_type(name),
                )
            )
    return files


async def scan_directory(root: Path) -> list[ScannedFile]:
    """List every image file under ``root`` with paths relative to it.

    The walk runs in a worker thread; the store is not touched here. Any
    ``OSError`` propagates to the caller.
    """
    logger.debug("scan_started", root=str(root))
    files = await asyncio.to_thread(_walk, Path(root))
    logger.info("scan_listed", root=str(root), files=len(files))
    return files
