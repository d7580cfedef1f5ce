# src/gridway/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .blocks import router as blocks_router
from .calendar import router as calendar_router
from .catalog import router as catalog_router
from .connections import router as connections_router
from .decisions import router as decisions_router
from .reports import router as reports_router
from .system import router as system_router

__all__ = [
    "blocks_router",
    "calendar_router",
    "catalog_router",
    "connections_router",
    "decisions_router",
    "reports_router",
    "system_router",
]
