"""FastAPI application for the gymflow API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import configure_logging
from ..db.engine import get_db_path, init_db
from ..errors import GymflowError, InvalidStateError, NotFoundError, ValidationError
from .routers import professional, progress, routines, schedule, workouts

logger = logging.getLogger(__name__)

# HTTP status for each domain error
ERROR_STATUS = {
    NotFoundError: 404,
    InvalidStateError: 409,
    ValidationError: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    db_path = get_db_path()
    if not db_path.exists():
        logger.info("Creating database at %s", db_path)
        await init_db(db_path)
    yield


async def handle_gymflow_error(request: Request, exc: GymflowError) -> JSONResponse:
    """Render domain errors as ``{"error": kind, "detail": message}``."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        500,
    )
    if status_code >= 500:
        logger.error("Unhandled %s on %s: %s", exc.kind, request.url.path, exc.message)
    else:
        logger.debug("%s on %s: %s", exc.kind, request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = FastAPI(
        title="gymflow",
        description="Weekly routine scheduling and workout progress API",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_exception_handler(GymflowError, handle_gymflow_error)

    app.include_router(schedule.router)
    app.include_router(routines.router)
    app.include_router(professional.router)
    app.include_router(workouts.router)
    app.include_router(progress.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
