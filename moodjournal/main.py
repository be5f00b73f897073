"""
FastAPI application exposing the store to a local presentation layer.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from moodjournal import __version__
from moodjournal.api.v1.api import api_router
from moodjournal.core.config import Settings, settings as default_settings
from moodjournal.core.exceptions import StorageError
from moodjournal.core.logging_config import log_error, setup_logging
from moodjournal.storage.base import MoodStore
from moodjournal.storage.selector import create_store


def create_app(config: Optional[Settings] = None, store: Optional[MoodStore] = None) -> FastAPI:
    """
    Build the application.

    The store is created and its schema ensured during startup; an
    InitializationError there aborts startup. The store is shut down when
    the application stops.
    """
    config = config or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(config.log_level)
        app.state.store = store or create_store(config)
        app.state.store.ensure_schema()
        try:
            yield
        finally:
            app.state.store.shutdown()

    app = FastAPI(title="Mood Journal", version=__version__, lifespan=lifespan)

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        log_error(exc, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage is unavailable, please retry"},
        )

    app.include_router(api_router, prefix="/api/v1")
    return app
