"""
FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scene_mapper import __version__
from scene_mapper.catalog.patterns import PATTERN_RULES
from scene_mapper.config import get_settings
from scene_mapper.services.confidence import get_confidence_estimator
from scene_mapper.services.interpreter import InvalidInputError, get_scene_interpreter

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the shared interpreter and estimator before serving."""
    interpreter = get_scene_interpreter()
    get_confidence_estimator()

    logger.info(
        "scene_services_ready",
        catalog_rules=len(PATTERN_RULES),
        connection_probability=interpreter.settings.connection_probability,
        seeded=interpreter.settings.random_seed is not None,
    )

    yield

    logger.info("scene_services_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Scene Mapper API",
        description="Forensic scene interpretation into scene graphs",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidInputError)
    async def invalid_description_handler(
        request: Request,
        exc: InvalidInputError,
    ) -> JSONResponse:
        logger.info("description_rejected", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=500,
            content={"detail": str(exc) if settings.debug else "Internal server error"},
        )

    from scene_mapper.api.routes import scenes

    app.include_router(scenes.router, prefix="/api/v1/scenes", tags=["scenes"])

    @app.get("/health")
    async def health_check() -> dict:
        return {
            "status": "healthy",
            "catalog_rules": len(PATTERN_RULES),
        }

    @app.get("/")
    async def root() -> dict:
        return {
            "name": "Scene Mapper API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()
