# src/gridway/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    blocks_router,
    calendar_router,
    catalog_router,
    connections_router,
    decisions_router,
    reports_router,
    system_router,
)

__all__ = [
    "blocks_router",
    "calendar_router",
    "catalog_router",
    "connections_router",
    "decisions_router",
    "reports_router",
    "system_router",
]
