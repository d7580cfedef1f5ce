# src/gridway/models/__init__.py
"""SQLAlchemy models for the Grid Way application."""

from .catalog import CatalogAttendee, CatalogEvent
from .connection import UserConnection
from .decision import SwipeDecision
from .moderation import UserBlock, UserReport

__all__ = [
    "CatalogAttendee", "CatalogEvent",
    "UserConnection",
    "SwipeDecision",
    "UserBlock", "UserReport",
]
