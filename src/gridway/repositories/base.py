"""
Repository interfaces - contracts every storage backend satisfies

Uniqueness is part of the contract: ``add`` methods raise ``ConflictError``
when the natural key already exists, and the check-and-insert must be atomic
for that key.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from gridway.domain import (
    AttendeeItem,
    Block,
    Connection,
    Decision,
    EventItem,
    Report,
    TargetType,
)


class DecisionRepository(ABC):
    """Append-only decision log."""

    @abstractmethod
    def add(self, decision: Decision) -> Decision:
        """Persist a decision; ConflictError if its key already exists."""

    @abstractmethod
    def get(self, user_id: str, target_id: str, target_type: TargetType) -> Decision | None:
        """Return the decision for a key, if any."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Decision]:
        """Return every decision made by ``user_id``."""


class ConnectionRepository(ABC):
    """Connection records, one per unordered pair of users."""

    @abstractmethod
    def add(self, connection: Connection) -> Connection:
        """Persist a connection; ConflictError if the pair is already connected."""

    @abstractmethod
    def find_between(self, first: str, second: str) -> Connection | None:
        """Return the connection between two users in either ordering."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Connection]:
        """Return connections where ``user_id`` is on either side."""

    @abstractmethod
    def remove_between(self, first: str, second: str) -> bool:
        """Delete the connection between two users; False when absent."""


class BlockRepository(ABC):
    """Directional block records."""

    @abstractmethod
    def add(self, block: Block) -> Block:
        """Persist a block; ConflictError if the ordered pair exists."""

    @abstractmethod
    def exists(self, blocker_id: str, blocked_user_id: str) -> bool:
        """Directional existence check."""

    @abstractmethod
    def remove(self, blocker_id: str, blocked_user_id: str) -> bool:
        """Delete a block; False when absent."""

    @abstractmethod
    def list_for_blocker(self, blocker_id: str) -> list[Block]:
        """Return blocks created by ``blocker_id``."""

    @abstractmethod
    def related_user_ids(self, user_id: str) -> set[str]:
        """Return ids that ``user_id`` blocked or that blocked ``user_id``."""


class ReportRepository(ABC):
    """Append-only reports."""

    @abstractmethod
    def add(self, report: Report) -> Report:
        """Persist a report."""

    @abstractmethod
    def list_for_reporter(self, reporter_id: str) -> list[Report]:
        """Return reports filed by ``reporter_id``."""


class CatalogRepository(ABC):
    """Swipeable items created outside the core."""

    @abstractmethod
    def add_event(self, event: EventItem) -> EventItem:
        """Persist an event; ConflictError if the id is taken."""

    @abstractmethod
    def upsert_attendee(self, attendee: AttendeeItem) -> AttendeeItem:
        """Insert or replace an attendee by id."""

    @abstractmethod
    def list_events(self) -> list[EventItem]:
        """Return events in creation order."""

    @abstractmethod
    def list_attendees(self) -> list[AttendeeItem]:
        """Return attendees in import order."""

    @abstractmethod
    def get_events(self, event_ids: Iterable[str]) -> list[EventItem]:
        """Return the known events among ``event_ids`` in creation order."""


class Repositories(ABC):
    """Bundle of repositories sharing one unit of work."""

    decisions: DecisionRepository
    connections: ConnectionRepository
    blocks: BlockRepository
    reports: ReportRepository
    catalog: CatalogRepository

    @abstractmethod
    def commit(self) -> None:
        """Make pending writes durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard writes made since the last commit."""
