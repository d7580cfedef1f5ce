"""Storage backends for the swipe engine."""

from .base import (
    BlockRepository,
    CatalogRepository,
    ConnectionRepository,
    DecisionRepository,
    ReportRepository,
    Repositories,
)
from .memory import MemoryRepositories, MemoryStore, get_memory_store
from .sql import SqlRepositories

__all__ = [
    "BlockRepository",
    "CatalogRepository",
    "ConnectionRepository",
    "DecisionRepository",
    "ReportRepository",
    "Repositories",
    "MemoryRepositories",
    "MemoryStore",
    "get_memory_store",
    "SqlRepositories",
]
