# src/gridway/main.py
"""Main entry point for the Grid Way application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from gridway.api.v1 import (
    blocks_router,
    calendar_router,
    catalog_router,
    connections_router,
    decisions_router,
    reports_router,
    system_router,
)
from gridway.core.errors import GridWayError
from gridway.core.logging import configure_logging
from gridway.core.settings import settings
from gridway.db.session import create_tables

logger = logging.getLogger(__name__)

DESCRIPTION = "Swipe-based discovery of conference events and attendees"

# Initialize FastAPI app
app = FastAPI(
    title=f"{settings.app_name} API",
    description=DESCRIPTION,
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(decisions_router, prefix="/api/v1")
app.include_router(calendar_router, prefix="/api/v1")
app.include_router(connections_router, prefix="/api/v1")
app.include_router(blocks_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(catalog_router, prefix="/api/v1")
app.include_router(system_router, prefix="/api/v1")


@app.exception_handler(GridWayError)
async def handle_domain_error(request: Request, exc: GridWayError) -> JSONResponse:
    """Translate service-layer errors into ``{"detail": ...}`` responses."""
    if exc.http_status >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.http_status, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed request bodies and parameters are reported as 400."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.storage_backend == "sql" and settings.auto_create_tables:
        create_tables()
    logger.info(
        "%s %s started with %s storage",
        settings.app_name,
        settings.app_version,
        settings.storage_backend,
    )


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": f"{settings.app_name} API",
        "version": settings.app_version,
        "description": DESCRIPTION,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("gridway.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
