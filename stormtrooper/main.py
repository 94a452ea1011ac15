"""Stormtrooper FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

from stormtrooper.config import settings
from stormtrooper.db.session import check_database, dispose_engine, init_models
from stormtrooper.middleware.error_handler import (
    StormtrooperException,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler,
)
from stormtrooper.api.routes import auth_router, streams_router, users_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Stormtrooper API...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.debug}")
    if settings.database_create_tables:
        await init_models()
    yield
    logger.info("Shutting down Stormtrooper API...")
    await dispose_engine()


def create_application() -> FastAPI:
    """Factory function to create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Stormtrooper live streaming backend API",
        version=settings.app_version,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # Register exception handlers
    app.add_exception_handler(StormtrooperException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include routers
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(streams_router, prefix="/api/v1")

    @app.get("/", tags=["Root"])
    async def root() -> dict:
        """Root endpoint returning API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "status": "operational",
        }

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        database_up = await check_database()
        return {
            "status": "healthy" if database_up else "degraded",
            "version": settings.app_version,
            "checks": {
                "api": "up",
                "database": "up" if database_up else "down",
            },
        }

    @app.get("/ready", tags=["Health"])
    async def readiness_check() -> dict:
        """Readiness check for deployments."""
        return {"ready": True}

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "stormtrooper.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level="debug" if settings.debug else "info",
    )
