"""
FastAPI application for the message body parsing service.

This is the main application that wires endpoints and middleware together.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import structlog

from ..version import API_VERSION
from ..config import settings
from ..logging_config import setup_logging
from .routes import health, version, parse
from .middleware import (
    setup_logging_middleware,
    setup_error_handling_middleware,
)

# Setup logging on module import
setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    logger.info(
        "Starting mailbody parsing API",
        version=API_VERSION,
        log_level=settings.log_level,
        max_mime_depth=settings.max_mime_depth,
    )
    yield
    logger.info("Shutting down mailbody parsing API")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Mail Body Parser",
        description="MIME decoding, HTML hardening and linkification of raw inbound mail",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Last added runs outermost: the request id is bound before errors are handled
    setup_error_handling_middleware(app)
    setup_logging_middleware(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(version.router, prefix="/api/v1", tags=["Version"])
    app.include_router(parse.router, prefix="/api/v1/parse", tags=["Parsing"])

    return app


# Create app instance
app = create_app()


def main() -> None:
    """
    Entry point for running the API server directly.

    For development use. In production, use uvicorn directly.
    """
    import uvicorn

    uvicorn.run(
        "mailbody.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
