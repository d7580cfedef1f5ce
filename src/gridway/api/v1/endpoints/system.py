"""System endpoints for the Grid Way API."""

from __future__ import annotations

from fastapi import APIRouter

from gridway.core.settings import settings

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/config")
async def get_public_config() -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes connection strings; suitable for client bootstrapping.
    """
    return {
        "app_name": settings.app_name,
        "version": settings.app_version,
        "storage_backend": settings.storage_backend,
        "atomic_connection_formation": settings.atomic_connection_formation,
        "swipe_threshold": settings.swipe_threshold,
        "stack_peek_depth": settings.stack_peek_depth,
    }
