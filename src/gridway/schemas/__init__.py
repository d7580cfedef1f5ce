# src/gridway/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .catalog import AttendeeIn, AttendeeResponse, CalendarResponse, EventCreate, EventResponse
from .connection import ConnectionResponse
from .decision import DecisionCreate, DecisionOutcomeResponse, DecisionResponse
from .moderation import (
    BlockCreate,
    BlockResponse,
    BlockStatus,
    ReportCreate,
    ReportOutcomeResponse,
    ReportResponse,
)

__all__ = [
    "AttendeeIn", "AttendeeResponse",
    "BlockCreate", "BlockResponse", "BlockStatus",
    "CalendarResponse",
    "ConnectionResponse",
    "DecisionCreate", "DecisionOutcomeResponse", "DecisionResponse",
    "EventCreate", "EventResponse",
    "ReportCreate", "ReportOutcomeResponse", "ReportResponse",
]
