"""Shared API dependencies: storage selection and service wiring."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from gridway.core.settings import settings
from gridway.db.session import get_db
from gridway.repositories import (
    MemoryRepositories,
    Repositories,
    SqlRepositories,
    get_memory_store,
)
from gridway.services import (
    CalendarService,
    CatalogService,
    ConnectionService,
    DiscoveryFeed,
    ModerationGate,
    SwipeDecisionService,
)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_repositories(db: SessionDep) -> Generator[Repositories, None, None]:
    """Yield the repositories for the configured storage backend.

    Writes left uncommitted by a request that raises are rolled back, so the
    shared memory store never keeps half of a failed request.

    Args:
        db: Database session, used only by the ``sql`` backend

    Yields:
        Repositories bound to this request
    """
    repos: Repositories
    if settings.storage_backend == "memory":
        repos = MemoryRepositories(get_memory_store())
    else:
        repos = SqlRepositories(db)
    try:
        yield repos
    except Exception:
        repos.rollback()
        raise


ReposDep = Annotated[Repositories, Depends(get_repositories)]


def get_decision_service(repos: ReposDep) -> SwipeDecisionService:
    return SwipeDecisionService(repos)


def get_connection_service(repos: ReposDep) -> ConnectionService:
    return ConnectionService(repos)


def get_calendar_service(repos: ReposDep) -> CalendarService:
    return CalendarService(repos)


def get_moderation_gate(repos: ReposDep) -> ModerationGate:
    return ModerationGate(repos)


def get_catalog_service(repos: ReposDep) -> CatalogService:
    return CatalogService(repos)


def get_discovery_feed(repos: ReposDep) -> DiscoveryFeed:
    return DiscoveryFeed(repos)


DecisionServiceDep = Annotated[SwipeDecisionService, Depends(get_decision_service)]
ConnectionServiceDep = Annotated[ConnectionService, Depends(get_connection_service)]
CalendarServiceDep = Annotated[CalendarService, Depends(get_calendar_service)]
ModerationGateDep = Annotated[ModerationGate, Depends(get_moderation_gate)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]
DiscoveryFeedDep = Annotated[DiscoveryFeed, Depends(get_discovery_feed)]
