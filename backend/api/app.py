"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from modules.debates.routes import router as debates_router
from shared.config import get_settings
from shared.exceptions import ColloquyError, NotFoundError, ValidationError
from shared.logging_config import configure_logging

from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


async def colloquy_error_handler(request: Request, exc: ColloquyError) -> JSONResponse:
    """Map domain errors that escape a route to JSON responses."""
    if isinstance(exc, NotFoundError):
        status_code = 404
    elif isinstance(exc, ValidationError):
        status_code = 400
    else:
        logger.error(f"Unhandled error on {request.url.path}: {exc.message}")
        status_code = 500
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-agent LLM debate API with live event streaming",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=["X-Debate-Id"],
    )

    app.add_exception_handler(ColloquyError, colloquy_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(debates_router, prefix="/api/debates", tags=["debates"])

    return app


# Application instance for uvicorn
app = create_app()
