"""
Main entrypoint for the Music Library API.

This module assembles the FastAPI application.  ``create_app`` runs
the startup sequence explicitly: configure logging, build the song
repository and the enrichment client from ``Settings``, wire them into
a ``SongService`` kept on ``app.state``, register error handlers and
include the versioned routes.  Run it with uvicorn's factory mode::

    uvicorn music_library_api.app.main:create_app --factory

or through ``run.py`` at the project root.  Interactive API docs are
served at ``/docs``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings
from .core.db import get_database_path, init_db
from .core.exceptions import SongLibraryError
from .core.logging_config import setup_logging
from .services.enrichment_client import EnrichmentClient
from .services.song_repository import SongRepository
from .services.song_service import SongService

logger = logging.getLogger(__name__)


async def handle_song_library_error(request: Request, exc: SongLibraryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI request validation failures as 400 ``{"error": ...}``.

    Query and path parameters are reported as ``Invalid <name>
    parameter``; body problems name the offending field.
    """
    message = "Invalid request"
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = [str(part) for part in first.get("loc", ())]
        source = loc[0] if loc else ""
        name = loc[-1] if len(loc) > 1 else ""
        if source in {"query", "path"} and name:
            message = f"Invalid {name} parameter"
        elif source == "body" and name:
            if first.get("type") == "missing":
                message = f"Field '{name}' is required"
            else:
                message = f"Invalid value for field '{name}'"
        elif source == "body":
            message = "Invalid request body"
    logger.warning("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app(
    settings: Optional[Settings] = None,
    enrichment_client: Optional[EnrichmentClient] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Application settings; read from the environment when omitted.
    enrichment_client : Optional[EnrichmentClient]
        Client for the enrichment service.  Built from
        ``settings.external_api_url`` when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The ``songs`` table
        is created when the application starts up.
    """
    if settings is None:
        settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file or None)

    db_path = get_database_path(settings.database_url)
    repository = SongRepository(db_path)
    if enrichment_client is None:
        enrichment_client = EnrichmentClient(
            settings.external_api_url,
            timeout=settings.external_api_timeout,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(db_path)
        logger.info("Database ready at %s", db_path)
        yield
        enrichment_client.close()
        logger.info("%s shutting down", settings.project_name)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.song_service = SongService(repository, enrichment_client)

    app.add_exception_handler(SongLibraryError, handle_song_library_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    app.include_router(v1_router)
    for path, operations in app.openapi()["paths"].items():
        for method in operations:
            logger.info("Setting up route: %s %s", method.upper(), path)

    return app
