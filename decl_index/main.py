"""Main FastAPI application for the Declaration Index."""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import structlog

from .api import search_router, lookup_router, health_router
from .config import get_settings
from .core.snapshot import load_snapshot
from .core.store import SnapshotStore
from .corpus import docs_root, ensure_docs
from .engine_instance import search_engine
from .models.response import ErrorResponse

settings = get_settings()

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer()
        if settings.log_format == "console"
        else structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    logger.info("Starting Declaration Index service", version=settings.app_version)

    # Without a snapshot there is nothing to serve, so failures here are fatal
    try:
        path = await ensure_docs(settings)
        snapshot = load_snapshot(path)
        search_engine.attach(SnapshotStore(snapshot, settings.integer_key_mode))
    except Exception as e:
        logger.error("Failed to load declaration data", error=str(e))
        raise

    docs = docs_root(settings)
    if settings.serve_docs and settings.snapshot_path is None and docs.is_dir():
        # Mounted after the API routers so they take precedence
        app.mount("/", StaticFiles(directory=docs, html=True), name="docs")
        logger.info("Serving docs", directory=str(docs))

    yield

    logger.info("Shutting down Declaration Index service")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Fuzzy declaration search and cross-reference lookups for generated docs",
    version=settings.app_version,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next) -> Response:
    """Log all HTTP requests."""
    start_time = time.time()
    logger.info("Request started", method=request.method, path=request.url.path)

    response = await call_next(request)

    process_time = time.time() - start_time
    logger.info(
        "Request completed",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        process_time_ms=round(process_time * 1000, 2)
    )

    return response


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle global exceptions."""
    logger.error(
        "Unhandled exception",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal Server Error",
            message="An unexpected error occurred",
            details={"exception": str(exc)} if settings.debug else None
        ).model_dump(mode="json")
    )


# Include API routers
app.include_router(search_router)
app.include_router(lookup_router)
app.include_router(health_router)


@app.get("/api", summary="API information", description="Get basic information about the API")
async def api_info() -> dict:
    """Get basic API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "ready": search_engine.is_ready,
        "endpoints": {
            "search": "/search_decl",
            "instances_for_class": "/instances_for_class",
            "instances_for_type": "/instances_for_type",
            "decl_name_to_link": "/decl_name_to_link",
            "module_imported_by": "/module_imported_by",
            "module_name_to_link": "/module_name_to_link",
            "annotate_instances": "/annotate_instances",
            "annotate_instances_for": "/annotate_instances_for",
            "linked_imported_by": "/linked_imported_by",
            "health": "/api/v1/health"
        }
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "decl_index.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers,
        log_level=settings.log_level.lower()
    )
