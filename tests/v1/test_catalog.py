# mypy: ignore-errors
# tests/v1/test_catalog.py
"""Tests for catalog, feed and calendar endpoints."""

import pytest
from fastapi import status

EVENTS = [
    {"id": "E1", "name": "Opening Keynote", "day": 15, "tags": ["Keynote"], "recommended": True},
    {"id": "E2", "name": "Ethics Panel", "day": 15, "tags": ["AI", "Panel"]},
    {"id": "E3", "name": "Networking Mixer", "day": 16, "tags": ["Networking"]},
]

ATTENDEES = [
    {"id": "alice", "name": "Alice", "role": "Engineer", "tags": ["#AI"]},
    {"id": "bob", "name": "Bob", "role": "Investor", "recommended": True},
    {"id": "carol", "name": "Carol", "role": "Researcher", "tags": ["#AI"]},
]


@pytest.fixture()
def catalog(client):
    for event in EVENTS:
        assert client.post("/api/v1/events", json=event).status_code == status.HTTP_201_CREATED
    assert client.post("/api/v1/attendees", json=ATTENDEES).status_code == status.HTTP_200_OK
    return client


def _decide(client, user_id, target_id, target_type="event", direction="right"):
    client.post(
        "/api/v1/decisions",
        json={
            "user_id": user_id,
            "target_id": target_id,
            "target_type": target_type,
            "direction": direction,
        },
    )


def test_list_events_and_attendees(catalog) -> None:
    events = catalog.get("/api/v1/events").json()
    attendees = catalog.get("/api/v1/attendees").json()

    assert [e["id"] for e in events] == ["E1", "E2", "E3"]
    assert events[0]["kind"] == "event"
    assert {a["id"] for a in attendees} == {"alice", "bob", "carol"}
    assert attendees[0]["kind"] == "attendee"


def test_duplicate_event_conflicts(catalog) -> None:
    response = catalog.post("/api/v1/events", json=EVENTS[0])

    assert response.status_code == status.HTTP_409_CONFLICT


def test_event_day_out_of_range(client) -> None:
    response = client.post("/api/v1/events", json={"id": "E9", "name": "Late", "day": 40})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_attendee_import_updates_existing(catalog) -> None:
    catalog.post("/api/v1/attendees", json=[{"id": "alice", "name": "Alice", "role": "CTO"}])

    roster = {a["id"]: a for a in catalog.get("/api/v1/attendees").json()}
    assert roster["alice"]["role"] == "CTO"
    assert len(roster) == 3


def test_rejected_attendee_import_keeps_roster(catalog) -> None:
    response = catalog.post(
        "/api/v1/attendees",
        json=[{"id": "alice", "name": "Alice", "role": "CTO"}, {"id": "zed", "name": "  "}],
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    roster = {a["id"]: a for a in catalog.get("/api/v1/attendees").json()}
    assert roster["alice"]["role"] == "Engineer"
    assert "zed" not in roster


def test_feed_orders_and_filters(catalog) -> None:
    _decide(catalog, "viewer", "E1", direction="left")

    response = catalog.get("/api/v1/feed/event", params={"user_id": "viewer"})

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()] == ["E2", "E3"]


def test_attendee_feed_applies_blocks_and_tags(catalog) -> None:
    catalog.post("/api/v1/blocks", json={"blocker_id": "carol", "blocked_user_id": "alice"})

    response = catalog.get("/api/v1/feed/attendee", params={"user_id": "alice"})
    assert [item["id"] for item in response.json()] == ["bob"]

    tagged = catalog.get("/api/v1/feed/attendee", params={"user_id": "bob", "tag": "#ai"})
    assert [item["id"] for item in tagged.json()] == ["alice", "carol"]
    assert tagged.json()[0]["role"] == "Engineer"


def test_unknown_feed_kind(client) -> None:
    response = client.get("/api/v1/feed/venue", params={"user_id": "viewer"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_calendar_scenario(catalog) -> None:
    _decide(catalog, "U", "E1")
    _decide(catalog, "U", "E2", direction="left")
    _decide(catalog, "U", "E3")

    data = catalog.get("/api/v1/calendar", params={"user_id": "U"}).json()
    assert sorted(data["event_ids"]) == ["E1", "E3"]
    assert data["dates"] == [15, 16]
    assert sorted(e["id"] for e in data["events"]) == ["E1", "E3"]

    day = catalog.get("/api/v1/calendar", params={"user_id": "U", "day": 16}).json()
    assert day["day"] == 16
    assert [e["id"] for e in day["events"]] == ["E3"]
