"""Pytest configuration and shared fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

# Keep test output free of exporter noise
os.environ.setdefault("OTEL_TRACES_EXPORTER", "none")
os.environ.setdefault("OTEL_METRICS_EXPORTER", "none")


class TickingClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=UTC)):
        self.current = start

    def __call__(self) -> str:
        self.current += timedelta(seconds=1)
        return self.current.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@pytest.fixture
def clock():
    """Ticking clock shared by the stores under test."""
    return TickingClock()


@pytest.fixture
def photos_dir(tmp_path):
    """A small photo tree with a nested folder and a non-image file."""
    root = tmp_path / "photos"
    (root / "trips").mkdir(parents=True)
    (root / "beach.jpg").write_bytes(b"\xff\xd8jpeg")
    (root / "cat.PNG").write_bytes(b"\x89PNGdata")
    (root / "trips" / "alps.webp").write_bytes(b"RIFFwebp")
    (root / "notes.txt").write_text("not a photo")
    return root


@pytest.fixture
def app(photos_dir, clock):
    """Application with fresh stores rooted at the temporary photo tree."""
    from albumnote.app import create_app
    from albumnote.config import Settings

    return create_app(Settings(photos_dir=photos_dir), clock=clock)


@pytest.fixture
def api_client(app):
    """FastAPI test client fixture with lifespan context."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def scanned_client(api_client):
    """Test client whose photo library has already been scanned."""
    response = api_client.post("/api/scan")
    assert response.status_code == 200
    return api_client


@pytest.fixture
def sample_note_data():
    """Sample note data for testing."""
    return {"content": "Hello world", "tags": ["Work", "WORK"]}
