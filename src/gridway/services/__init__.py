# src/gridway/services/__init__.py
"""Business logic services for the Grid Way application."""

from .calendar import CalendarService
from .connections import ConnectionService
from .decisions import DecisionOutcome, SwipeDecisionService
from .feed import CatalogService, DiscoveryFeed
from .moderation import ModerationGate, ReportOutcome

__all__ = [
    "CalendarService",
    "CatalogService",
    "ConnectionService",
    "DecisionOutcome",
    "DiscoveryFeed",
    "ModerationGate",
    "ReportOutcome",
    "SwipeDecisionService",
]
