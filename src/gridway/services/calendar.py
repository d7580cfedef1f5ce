"""Derived calendar views over the decision log.

Nothing here is stored: every view is recomputed from the user's decisions
so it cannot drift from the log.
"""

from __future__ import annotations

from gridway.domain import EventItem
from gridway.repositories import Repositories

from .connections import require_id


class CalendarService:
    """Read-only queries for a user's interested events."""

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    def interested_event_ids(self, user_id: str) -> list[str]:
        """Return ids of events the user swiped right on, in decision order."""
        decisions = self.repos.decisions.list_for_user(require_id(user_id, "user_id"))
        return [d.target_id for d in decisions if d.marks_interest]

    def interested_events(self, user_id: str) -> list[EventItem]:
        """Return catalog events the user is interested in."""
        return self.repos.catalog.get_events(self.interested_event_ids(user_id))

    def calendar_dates(self, user_id: str) -> list[int]:
        """Return the distinct days, ascending, that hold an interested event."""
        return sorted({e.day for e in self.interested_events(user_id) if e.day is not None})

    def interested_events_on(self, user_id: str, day: int) -> list[EventItem]:
        """Return interested events scheduled on ``day``."""
        return [e for e in self.interested_events(user_id) if e.day == day]
