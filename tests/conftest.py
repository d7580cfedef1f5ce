# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("STORAGE_BACKEND", "sql")

from gridway.db.session import Base, enable_sqlite_savepoints
from gridway.db.session import get_db as app_get_session
from gridway.domain import AttendeeItem, EventItem
from gridway.main import app as fastapi_app
from gridway.repositories import MemoryRepositories, MemoryStore, SqlRepositories

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = enable_sqlite_savepoints(
        create_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def memory_repos() -> MemoryRepositories:
    """Fresh in-memory repositories backed by a private store."""
    return MemoryRepositories(MemoryStore())


@pytest.fixture()
def sql_repos(db_session: Session) -> SqlRepositories:
    return SqlRepositories(db_session)


@pytest.fixture()
def sample_events() -> list[EventItem]:
    return [
        EventItem(id="E1", name="Opening Keynote", day=15, tags=("Keynote",), recommended=True),
        EventItem(id="E2", name="Ethics Panel", day=15, tags=("AI", "Panel")),
        EventItem(id="E3", name="Networking Mixer", day=16, tags=("Networking",), recommended=True),
    ]


@pytest.fixture()
def sample_attendees() -> list[AttendeeItem]:
    return [
        AttendeeItem(id="alice", name="Alice", role="Engineer", tags=("#AI",)),
        AttendeeItem(id="bob", name="Bob", role="Investor", tags=("#VC",), recommended=True),
        AttendeeItem(id="carol", name="Carol", role="Researcher", tags=("#AI", "#Policy")),
        AttendeeItem(id="dave", name="Dave", role="Founder"),
    ]


@pytest.fixture()
def seed_catalog(
    sample_events: list[EventItem],
    sample_attendees: list[AttendeeItem],
) -> Callable[[MemoryRepositories | SqlRepositories], None]:
    """Return a helper that loads the sample catalog into some repositories."""

    def _seed(repos: MemoryRepositories | SqlRepositories) -> None:
        for event in sample_events:
            repos.catalog.add_event(event)
        for attendee in sample_attendees:
            repos.catalog.upsert_attendee(attendee)
        repos.commit()

    return _seed
