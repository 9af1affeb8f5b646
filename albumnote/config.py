"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings(BaseModel):
    """Application settings."""

    photos_dir: Path = Path("./sample-photos")
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 5173
    notes_default_limit: int = 20
    photos_default_limit: int = 50
    serve_photos: bool = True

    @classmethod
    def from_env(cls) -> Settings:
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            photos_dir=Path(os.getenv("PHOTOS_DIR", "./sample-photos")).expanduser().resolve(),
            api_prefix=os.getenv("API_PREFIX", "/api"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "5173")),
            notes_default_limit=int(os.getenv("NOTES_DEFAULT_LIMIT", "20")),
            photos_default_limit=int(os.getenv("PHOTOS_DEFAULT_LIMIT", "50")),
            serve_photos=_env_bool("SERVE_PHOTOS", "true"),
        )
