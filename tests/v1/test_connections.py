# mypy: ignore-errors
# tests/v1/test_connections.py
"""Tests for connection endpoints."""

from fastapi import status


def _connect(client, user_id, other_id):
    return client.post(
        "/api/v1/decisions",
        json={
            "user_id": user_id,
            "target_id": other_id,
            "target_type": "attendee",
            "direction": "right",
        },
    )


def test_connections_are_symmetric(client) -> None:
    _connect(client, "X", "Y")

    for user_id in ("X", "Y"):
        response = client.get("/api/v1/connections", params={"user_id": user_id})
        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 1
    assert client.get("/api/v1/connections", params={"user_id": "Z"}).json() == []


def test_mutual_swipes_keep_one_connection(client) -> None:
    _connect(client, "X", "Y")
    _connect(client, "Y", "X")

    assert len(client.get("/api/v1/connections", params={"user_id": "X"}).json()) == 1


def test_remove_connection_then_not_found(client) -> None:
    _connect(client, "X", "Y")

    response = client.delete("/api/v1/connections/Y/X")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"success": True}
    assert client.get("/api/v1/connections", params={"user_id": "X"}).json() == []

    decisions = client.get("/api/v1/decisions", params={"user_id": "X"}).json()
    assert [d["target_id"] for d in decisions] == ["Y"]

    again = client.delete("/api/v1/connections/X/Y")
    assert again.status_code == status.HTTP_404_NOT_FOUND
    assert again.json()["detail"] == "Connection not found"
