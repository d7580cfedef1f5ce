"""In-memory repository implementations.

Used by the ``memory`` storage backend and by service tests. Data lives in a
``MemoryStore`` shared by every request; each ``MemoryRepositories`` view
keeps its own undo journal so ``rollback`` only discards its own writes.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable

from gridway.core.errors import ConflictError
from gridway.domain import (
    AttendeeItem,
    Block,
    Connection,
    Decision,
    EventItem,
    Report,
    TargetType,
    pair_key,
)

from .base import (
    BlockRepository,
    CatalogRepository,
    ConnectionRepository,
    DecisionRepository,
    ReportRepository,
    Repositories,
)

__all__ = ["MemoryStore", "MemoryRepositories", "get_memory_store"]

UndoFn = Callable[[], None]


class MemoryStore:
    """Process-wide container for every collection."""

    def __init__(self) -> None:
        self.data_lock = threading.RLock()
        self.decisions: dict[tuple[str, str, TargetType], Decision] = {}
        self.connections: dict[str, Connection] = {}
        self.blocks: dict[tuple[str, str], Block] = {}
        self.reports: list[Report] = []
        self.events: dict[str, EventItem] = {}
        self.attendees: dict[str, AttendeeItem] = {}

    def clear(self) -> None:
        with self.data_lock:
            self.decisions.clear()
            self.connections.clear()
            self.blocks.clear()
            self.reports.clear()
            self.events.clear()
            self.attendees.clear()


class _MemoryRepository:
    def __init__(self, store: MemoryStore, journal: list[UndoFn]) -> None:
        self._store = store
        self._journal = journal


class MemoryDecisionRepository(_MemoryRepository, DecisionRepository):
    def add(self, decision: Decision) -> Decision:
        key = decision.key
        with self._store.data_lock:
            if key in self._store.decisions:
                raise ConflictError("Decision already recorded for this item")
            self._store.decisions[key] = decision
        self._journal.append(lambda: self._store.decisions.pop(key, None))
        return decision

    def get(self, user_id: str, target_id: str, target_type: TargetType) -> Decision | None:
        with self._store.data_lock:
            return self._store.decisions.get((user_id, target_id, target_type))

    def list_for_user(self, user_id: str) -> list[Decision]:
        with self._store.data_lock:
            return [d for d in self._store.decisions.values() if d.user_id == user_id]


class MemoryConnectionRepository(_MemoryRepository, ConnectionRepository):
    def add(self, connection: Connection) -> Connection:
        key = pair_key(connection.user_id, connection.connected_user_id)
        with self._store.data_lock:
            if key in self._store.connections:
                raise ConflictError("Users are already connected")
            self._store.connections[key] = connection
        self._journal.append(lambda: self._store.connections.pop(key, None))
        return connection

    def find_between(self, first: str, second: str) -> Connection | None:
        with self._store.data_lock:
            return self._store.connections.get(pair_key(first, second))

    def list_for_user(self, user_id: str) -> list[Connection]:
        with self._store.data_lock:
            return [c for c in self._store.connections.values() if c.involves(user_id)]

    def remove_between(self, first: str, second: str) -> bool:
        key = pair_key(first, second)
        with self._store.data_lock:
            removed = self._store.connections.pop(key, None)
        if removed is None:
            return False
        self._journal.append(lambda: self._store.connections.setdefault(key, removed))
        return True


class MemoryBlockRepository(_MemoryRepository, BlockRepository):
    def add(self, block: Block) -> Block:
        key = (block.blocker_id, block.blocked_user_id)
        with self._store.data_lock:
            if key in self._store.blocks:
                raise ConflictError("User already blocked")
            self._store.blocks[key] = block
        self._journal.append(lambda: self._store.blocks.pop(key, None))
        return block

    def exists(self, blocker_id: str, blocked_user_id: str) -> bool:
        with self._store.data_lock:
            return (blocker_id, blocked_user_id) in self._store.blocks

    def remove(self, blocker_id: str, blocked_user_id: str) -> bool:
        key = (blocker_id, blocked_user_id)
        with self._store.data_lock:
            removed = self._store.blocks.pop(key, None)
        if removed is None:
            return False
        self._journal.append(lambda: self._store.blocks.setdefault(key, removed))
        return True

    def list_for_blocker(self, blocker_id: str) -> list[Block]:
        with self._store.data_lock:
            return [b for b in self._store.blocks.values() if b.blocker_id == blocker_id]

    def related_user_ids(self, user_id: str) -> set[str]:
        related: set[str] = set()
        with self._store.data_lock:
            for blocker_id, blocked_user_id in self._store.blocks:
                if blocker_id == user_id:
                    related.add(blocked_user_id)
                elif blocked_user_id == user_id:
                    related.add(blocker_id)
        return related


class MemoryReportRepository(_MemoryRepository, ReportRepository):
    def add(self, report: Report) -> Report:
        with self._store.data_lock:
            self._store.reports.append(report)
        self._journal.append(lambda: self._store.reports.remove(report))
        return report

    def list_for_reporter(self, reporter_id: str) -> list[Report]:
        with self._store.data_lock:
            return [r for r in self._store.reports if r.reporter_id == reporter_id]


class MemoryCatalogRepository(_MemoryRepository, CatalogRepository):
    def add_event(self, event: EventItem) -> EventItem:
        with self._store.data_lock:
            if event.id in self._store.events:
                raise ConflictError(f"Event {event.id} already exists")
            self._store.events[event.id] = event
        self._journal.append(lambda: self._store.events.pop(event.id, None))
        return event

    def upsert_attendee(self, attendee: AttendeeItem) -> AttendeeItem:
        with self._store.data_lock:
            previous = self._store.attendees.get(attendee.id)
            self._store.attendees[attendee.id] = attendee

        def _undo() -> None:
            if previous is None:
                self._store.attendees.pop(attendee.id, None)
            else:
                self._store.attendees[attendee.id] = previous

        self._journal.append(_undo)
        return attendee

    def list_events(self) -> list[EventItem]:
        with self._store.data_lock:
            return list(self._store.events.values())

    def list_attendees(self) -> list[AttendeeItem]:
        with self._store.data_lock:
            return list(self._store.attendees.values())

    def get_events(self, event_ids: Iterable[str]) -> list[EventItem]:
        wanted = set(event_ids)
        with self._store.data_lock:
            return [e for e in self._store.events.values() if e.id in wanted]


class MemoryRepositories(Repositories):
    """Unit of work over a ``MemoryStore``.

    Writes are visible immediately; ``rollback`` replays the undo journal
    in reverse to discard everything written since the last ``commit``.
    """

    def __init__(self, store: MemoryStore | None = None) -> None:
        self.store = store or MemoryStore()
        self._journal: list[UndoFn] = []
        self.decisions = MemoryDecisionRepository(self.store, self._journal)
        self.connections = MemoryConnectionRepository(self.store, self._journal)
        self.blocks = MemoryBlockRepository(self.store, self._journal)
        self.reports = MemoryReportRepository(self.store, self._journal)
        self.catalog = MemoryCatalogRepository(self.store, self._journal)

    def commit(self) -> None:
        self._journal.clear()

    def rollback(self) -> None:
        with self.store.data_lock:
            while self._journal:
                undo = self._journal.pop()
                undo()


class _MemoryStoreSingleton:
    _instance: MemoryStore | None = None

    @classmethod
    def get_instance(cls) -> MemoryStore:
        """Get or create the process-wide store."""
        if cls._instance is None:
            cls._instance = MemoryStore()
        return cls._instance


def get_memory_store() -> MemoryStore:
    """Return the process-wide store used by the ``memory`` backend."""
    return _MemoryStoreSingleton.get_instance()
