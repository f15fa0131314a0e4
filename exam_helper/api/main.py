"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, exam_helper.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exam_helper.api.deps.dependencies import get_service_cache
from exam_helper.api.error_handlers import register_exception_handlers
from exam_helper.configs import get_settings
from exam_helper.observability import configure_logging
from exam_helper.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import documents_router, health_router, study_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events. The document registry lives
    exactly as long as the application.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    # Startup
    cache = get_service_cache()
    _ = cache.registry
    logger.info("Document registry ready")

    yield

    # Shutdown
    cache.clear()
    logger.info("Document registry cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="Exam Helper API",
        description="Upload a study document, then summarize it, list exam questions or ask about it",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware (last added runs first)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(study_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "exam_helper.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
