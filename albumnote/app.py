"""FastAPI application for Albumnote."""

from collections.abc import Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from .config import Settings
from .errors import register_exception_handlers
from .observability import initialize_observability
from .routes import (
    albums_router,
    health_router,
    notes_router,
    photos_router,
    scan_router,
    tags_router,
)
from .store import NoteStore, PhotoStore
from .store.clock import utc_now_iso

# Initialize logger
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    logger.info("api_starting")

    initialize_observability()

    logger.info("api_started", photos_dir=str(app.state.settings.photos_dir))

    yield

    # Shutdown
    logger.info(
        "api_shutdown_complete",
        notes=len(app.state.notes),
        photos=len(app.state.photos),
    )


def create_app(settings: Settings | None = None, clock: Callable[[], str] = utc_now_iso) -> FastAPI:
    """Build an application with its own, empty note and photo stores."""
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="Albumnote API",
        description="Local photo library and notes with shared tags",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.notes = NoteStore(clock=clock)
    app.state.photos = PhotoStore(clock=clock)

    # Instrument FastAPI with OpenTelemetry
    FastAPIInstrumentor.instrument_app(app)

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    for router in (notes_router, tags_router, photos_router, albums_router, scan_router):
        app.include_router(router, prefix=settings.api_prefix)

    if settings.serve_photos:
        app.mount(
            "/photos",
            StaticFiles(directory=settings.photos_dir, check_dir=False),
            name="photo-files",
        )

    return app


app = create_app()
