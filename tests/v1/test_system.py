# mypy: ignore-errors
# tests/v1/test_system.py
"""Tests for system endpoints and storage backend selection."""

import pytest
from fastapi import status

from gridway.api.v1.dependencies import get_repositories
from gridway.core.errors import ValidationError
from gridway.core.settings import settings
from gridway.domain import Block
from gridway.repositories import get_memory_store


def test_public_config(client) -> None:
    response = client.get("/api/v1/system/config")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["storage_backend"] == "sql"
    assert data["stack_peek_depth"] == 2


def test_memory_backend_serves_same_api(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "storage_backend", "memory")
    store = get_memory_store()
    store.clear()
    try:
        payload = {
            "user_id": "u1",
            "target_id": "E1",
            "target_type": "event",
            "direction": "right",
        }
        assert client.post("/api/v1/decisions", json=payload).status_code == status.HTTP_201_CREATED
        assert client.post("/api/v1/decisions", json=payload).status_code == status.HTTP_409_CONFLICT
        assert len(store.decisions) == 1
    finally:
        store.clear()


def test_failed_request_rolls_back_memory_writes(db_session, monkeypatch) -> None:
    monkeypatch.setattr(settings, "storage_backend", "memory")
    store = get_memory_store()
    store.clear()
    try:
        dependency = get_repositories(db_session)
        repos = next(dependency)
        repos.blocks.add(Block(blocker_id="a", blocked_user_id="b"))

        with pytest.raises(ValidationError):
            dependency.throw(ValidationError("request failed"))

        assert store.blocks == {}
    finally:
        store.clear()
