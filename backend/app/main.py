"""model-viewer backend - FastAPI application."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app import __version__
from app.api import router as api_router
from app.core.config import get_settings
from app.core.errors import InternalError, InvalidRequestError, ModelViewerError
from app.core.logging import setup_logging
from app.core.middleware import RequestIdMiddleware
from app.db import close_db, init_db

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan handler - initializes DB and storage on startup."""
    settings = get_settings()
    logger.info(
        "Configuration loaded",
        extra={
            "port": settings.server.port,
            "upload_dir": settings.storage.upload_dir,
            "models_dir": settings.storage.models_dir,
            "database_url": settings.database.url.split("@")[-1],  # Hide credentials
        },
    )

    Path(settings.storage.upload_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.storage.models_dir).mkdir(parents=True, exist_ok=True)

    await init_db(
        settings.database.url,
        settings.database.echo,
        create_tables=settings.database.create_tables,
    )

    yield

    await close_db()


async def model_viewer_error_handler(
    _request: Request, exc: ModelViewerError
) -> JSONResponse:
    """Render ModelViewerError exceptions as standardized error responses."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies and query strings as 400 INVALID_REQUEST."""
    fields = {".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()}
    fields.discard("")
    message = "Invalid request"
    if fields:
        message = f"Invalid request: {', '.join(sorted(fields))}"
    error = InvalidRequestError(message)
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(),
    )


async def generic_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected exceptions (database errors included) and return a 500."""
    logger.exception("Unexpected error: %s", exc)
    error = InternalError()
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_response().model_dump(),
    )


def create_app() -> FastAPI:
    """Build the application from the current settings."""
    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.json_format)

    app = FastAPI(
        title="model-viewer",
        description="3D model viewer: upload, convert, annotate",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(RequestIdMiddleware)

    app.add_exception_handler(ModelViewerError, model_viewer_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(api_router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    async def viewer() -> FileResponse:
        """Serve the viewer page."""
        return FileResponse(STATIC_DIR / "index.html")

    # Converted models; the directory is created on startup or first upload
    app.mount(
        settings.storage.models_url_prefix,
        StaticFiles(directory=settings.storage.models_dir, check_dir=False),
        name="models",
    )
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return app


app = create_app()
