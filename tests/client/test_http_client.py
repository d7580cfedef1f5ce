# tests/client/test_http_client.py
"""Tests for the async API client against the in-process application."""

import httpx
import pytest

from gridway.client import CardStackController, GridWayClient
from gridway.core.errors import ConflictError, DownstreamUnavailableError, NotFoundError
from gridway.domain import AttendeeItem, Direction, EventItem, TargetType


@pytest.fixture()
def api_client(app, sql_repos, seed_catalog) -> GridWayClient:
    seed_catalog(sql_repos)
    return GridWayClient("http://test", transport=httpx.ASGITransport(app=app))


@pytest.mark.asyncio
async def test_feed_returns_domain_items(api_client):
    async with api_client:
        events = await api_client.feed("viewer", TargetType.EVENT)
        attendees = await api_client.feed("alice", TargetType.ATTENDEE, tag="#vc")

    assert [e.id for e in events] == ["E1", "E3", "E2"]
    assert all(isinstance(e, EventItem) for e in events)
    assert events[0].day == 15
    assert attendees == [
        AttendeeItem(id="bob", name="Bob", role="Investor", tags=("#VC",), recommended=True)
    ]


@pytest.mark.asyncio
async def test_duplicate_decision_maps_to_conflict(api_client):
    async with api_client:
        outcome = await api_client.record_decision("u1", "u2", TargetType.ATTENDEE, Direction.RIGHT)
        assert outcome.connection is not None

        with pytest.raises(ConflictError):
            await api_client.record_decision("u1", "u2", TargetType.ATTENDEE, Direction.LEFT)

        connections = await api_client.connections("u2")
        assert [c.id for c in connections] == [outcome.connection.id]


@pytest.mark.asyncio
async def test_missing_connection_maps_to_not_found(api_client):
    async with api_client:
        with pytest.raises(NotFoundError):
            await api_client.remove_connection("u1", "u2")


@pytest.mark.asyncio
async def test_moderation_round_trip(api_client):
    async with api_client:
        outcome = await api_client.report("alice", "bob", "Spam or scam", also_block=True)
        assert outcome.blocked is True
        assert await api_client.is_blocked("alice", "bob") is True

        feed = await api_client.feed("bob", TargetType.ATTENDEE)
        assert "alice" not in [item.id for item in feed]

        await api_client.unblock("alice", "bob")
        assert await api_client.is_blocked("alice", "bob") is False
        assert len(await api_client.reports("alice")) == 1


@pytest.mark.asyncio
async def test_card_stack_dispatches_through_client(api_client):
    async with api_client:
        stack = CardStackController(
            TargetType.EVENT,
            dispatcher=api_client.dispatcher_for("viewer"),
            threshold=1 / 3,
        )
        stack.load(await api_client.feed("viewer", TargetType.EVENT))

        stack.swipe("E1", Direction.RIGHT)
        stack.swipe("E3", Direction.LEFT)
        delivered = await stack.flush()

        calendar = await api_client.calendar("viewer")

    assert [i.item_id for i in delivered] == ["E1", "E3"]
    assert calendar.event_ids == ["E1"]
    assert calendar.dates == [15]


@pytest.mark.asyncio
async def test_transport_failure_maps_to_downstream_unavailable():
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = GridWayClient("http://test", transport=httpx.MockTransport(_refuse))
    async with client:
        with pytest.raises(DownstreamUnavailableError):
            await client.decisions("u1")


@pytest.mark.asyncio
async def test_server_error_maps_to_downstream_unavailable():
    def _fail(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"detail": "Could not form connection"})

    client = GridWayClient("http://test", transport=httpx.MockTransport(_fail))
    async with client:
        with pytest.raises(DownstreamUnavailableError) as exc_info:
            await client.record_decision("u1", "u2", TargetType.ATTENDEE, Direction.RIGHT)

    assert "Could not form connection" in exc_info.value.detail
