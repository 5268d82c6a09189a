"""FastAPI application for the lift-match HTTP API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import Config
from ..data.exercise_loader import seed_catalog_from_json
from ..db.engine import init_db
from ..errors import NotFoundError
from ..services import build_services
from .routers import admin, exercises

logger = logging.getLogger(__name__)


def create_app(config: Config | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or Config.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Create and seed the database on first start."""
        if not config.db_path.exists():
            config.data_dir.mkdir(parents=True, exist_ok=True)
            await init_db(config.db_path)
            await seed_catalog_from_json(config.db_path)
            logger.info("Initialized database at %s", config.db_path)
        yield

    app = FastAPI(
        title="lift-match",
        description="Exercise name resolution for AI-generated workout programs",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = build_services(config)

    app.include_router(exercises.router)
    app.include_router(admin.router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    return app
