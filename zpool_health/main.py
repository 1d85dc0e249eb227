"""
zpool-health HTTP service

FastAPI application exposing pool health evaluations.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from . import __version__
from .config import get_config
from .api.routers import health_router
from .zfs_operations.core.exceptions.validation_exceptions import ValidationException

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events
    """
    logger.info("Starting zpool-health API service...")
    logger.info(f"Configuration: {get_config().get_summary()}")
    yield
    logger.info("Shutting down zpool-health API service...")


def create_app() -> FastAPI:
    config = get_config()
    app = FastAPI(
        title="zpool-health API",
        description="ZFS pool health evaluation",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if config.server.enable_docs else None,
        redoc_url="/redoc" if config.server.enable_docs else None,
    )

    # Threshold configuration errors surface while the service is built
    @app.exception_handler(ValidationException)
    async def validation_exception_handler(request, exc: ValidationException):
        return JSONResponse(status_code=422, content={"detail": exc.to_dict()})

    app.include_router(health_router)

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "name": "zpool-health",
            "version": __version__,
            "docs": "/docs",
            "health": "/api/v1/pools/health",
        }

    return app


app = create_app()
