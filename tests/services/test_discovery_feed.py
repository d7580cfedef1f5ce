# tests/services/test_discovery_feed.py
"""Tests for the item catalog and discovery feed."""

import pytest

from gridway.core.errors import ConflictError, ValidationError
from gridway.domain import AttendeeItem, EventItem, TargetType
from gridway.services import CatalogService, DiscoveryFeed, ModerationGate, SwipeDecisionService


@pytest.fixture(params=["memory", "sql"])
def repos(request, memory_repos, sql_repos, seed_catalog):
    chosen = memory_repos if request.param == "memory" else sql_repos
    seed_catalog(chosen)
    return chosen


class TestCatalog:
    def test_create_event_rejects_duplicate_id(self, repos):
        with pytest.raises(ConflictError):
            CatalogService(repos).create_event(EventItem(id="E1", name="Again"))

    def test_create_event_validates_day(self, repos):
        with pytest.raises(ValidationError):
            CatalogService(repos).create_event(EventItem(id="E9", name="Late", day=32))

    def test_create_event_cleans_tags(self, repos):
        event = CatalogService(repos).create_event(
            EventItem(id="E9", name=" Demo ", tags=("AI", " AI", "", "Demo"))
        )

        assert event.name == "Demo"
        assert event.tags == ("AI", "Demo")
        assert CatalogService(repos).list_events()[-1] == event

    def test_import_attendees_upserts_by_id(self, repos):
        catalog = CatalogService(repos)
        catalog.import_attendees(
            [
                AttendeeItem(id="alice", name="Alice", role="CTO"),
                AttendeeItem(id="erin", name="Erin"),
            ]
        )

        roster = {a.id: a for a in catalog.list_attendees()}
        assert roster["alice"].role == "CTO"
        assert "erin" in roster
        assert len(roster) == 5

    def test_import_rejects_nameless_attendee(self, repos):
        with pytest.raises(ValidationError):
            CatalogService(repos).import_attendees([AttendeeItem(id="x", name=" ")])

    def test_rejected_batch_discards_earlier_upserts(self, repos):
        catalog = CatalogService(repos)

        with pytest.raises(ValidationError):
            catalog.import_attendees(
                [
                    AttendeeItem(id="alice", name="Alice", role="CTO"),
                    AttendeeItem(id="erin", name="Erin"),
                    AttendeeItem(id="bad", name="  "),
                ]
            )

        roster = {a.id: a for a in catalog.list_attendees()}
        assert roster["alice"].role == "Engineer"
        assert "erin" not in roster
        assert len(roster) == 4

    def test_overlong_id_is_rejected(self, repos):
        with pytest.raises(ValidationError):
            CatalogService(repos).create_event(EventItem(id="E" * 65, name="Too long"))


class TestBuildFeed:
    def test_recommended_first_then_catalog_order(self, repos):
        feed = DiscoveryFeed(repos).build_feed("viewer", TargetType.EVENT)

        assert [item.id for item in feed] == ["E1", "E3", "E2"]

    def test_decided_items_are_dropped(self, repos):
        SwipeDecisionService(repos).record_decision("viewer", "E1", "event", "left")

        feed = DiscoveryFeed(repos).build_feed("viewer", "event")

        assert "E1" not in [item.id for item in feed]

    def test_attendee_feed_excludes_viewer_and_blocked(self, repos):
        ModerationGate(repos).block("carol", "alice")

        feed = DiscoveryFeed(repos).build_feed("alice", "attendee")

        assert [item.id for item in feed] == ["bob", "dave"]

    def test_decision_on_event_does_not_hide_attendee_with_same_id(self, repos):
        SwipeDecisionService(repos).record_decision("viewer", "bob", "event", "left")

        feed = DiscoveryFeed(repos).build_feed("viewer", "attendee")

        assert "bob" in [item.id for item in feed]

    def test_tag_filter_is_case_insensitive(self, repos):
        feed = DiscoveryFeed(repos).build_feed("viewer", "attendee", tag="#ai")

        assert [item.id for item in feed] == ["alice", "carol"]

    def test_unknown_kind_rejected(self, repos):
        with pytest.raises(ValidationError):
            DiscoveryFeed(repos).build_feed("viewer", "venue")

    def test_feed_exhausts_after_every_decision(self, repos):
        decisions = SwipeDecisionService(repos)
        for event_id in ("E1", "E2", "E3"):
            decisions.record_decision("viewer", event_id, "event", "right")

        assert DiscoveryFeed(repos).build_feed("viewer", "event") == []
