"""SQLAlchemy-backed repository implementations.

Unique constraints on the tables arbitrate concurrent inserts: a lost race
surfaces as ``IntegrityError`` inside a savepoint, which is translated into
``ConflictError``.
"""
from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from gridway.core.errors import ConflictError
from gridway.db.time import as_utc
from gridway.domain import (
    AttendeeItem,
    Block,
    Connection,
    Decision,
    Direction,
    EventItem,
    Report,
    ReportReason,
    TargetType,
    pair_key,
)
from gridway.models import (
    CatalogAttendee,
    CatalogEvent,
    SwipeDecision,
    UserBlock,
    UserConnection,
    UserReport,
)

from .base import (
    BlockRepository,
    CatalogRepository,
    ConnectionRepository,
    DecisionRepository,
    ReportRepository,
    Repositories,
)

__all__ = ["SqlRepositories"]


def _to_decision(row: SwipeDecision) -> Decision:
    return Decision(
        id=row.id,
        user_id=row.user_id,
        target_id=row.target_id,
        target_type=TargetType(row.target_type),
        direction=Direction(row.direction),
        created_at=as_utc(row.created_at),
    )


def _to_connection(row: UserConnection) -> Connection:
    return Connection(
        id=row.id,
        user_id=row.user_id,
        connected_user_id=row.connected_user_id,
        created_at=as_utc(row.created_at),
    )


def _to_block(row: UserBlock) -> Block:
    return Block(
        id=row.id,
        blocker_id=row.blocker_id,
        blocked_user_id=row.blocked_user_id,
        created_at=as_utc(row.created_at),
    )


def _to_report(row: UserReport) -> Report:
    return Report(
        id=row.id,
        reporter_id=row.reporter_id,
        reported_user_id=row.reported_user_id,
        reason=ReportReason(row.reason),
        additional_details=row.additional_details,
        created_at=as_utc(row.created_at),
    )


def _to_event(row: CatalogEvent) -> EventItem:
    return EventItem(
        id=row.id,
        name=row.name,
        location=row.location,
        time_label=row.time_label,
        day=row.day,
        tags=tuple(row.tags or ()),
        recommended=row.recommended,
    )


def _to_attendee(row: CatalogAttendee) -> AttendeeItem:
    return AttendeeItem(
        id=row.id,
        name=row.name,
        role=row.role,
        bio=row.bio,
        tags=tuple(row.tags or ()),
        recommended=row.recommended,
    )


class _SqlRepository:
    """Thin wrapper around a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _insert(self, row: object, conflict_detail: str) -> None:
        # The savepoint confines a lost race to this row; earlier pending writes survive.
        try:
            with self.session.begin_nested():
                self.session.add(row)
        except IntegrityError as exc:
            raise ConflictError(conflict_detail) from exc


class SqlDecisionRepository(_SqlRepository, DecisionRepository):
    def add(self, decision: Decision) -> Decision:
        if self.get(decision.user_id, decision.target_id, decision.target_type) is not None:
            raise ConflictError("Decision already recorded for this item")
        self._insert(
            SwipeDecision(
                id=decision.id,
                user_id=decision.user_id,
                target_id=decision.target_id,
                target_type=decision.target_type.value,
                direction=decision.direction.value,
                created_at=decision.created_at,
            ),
            "Decision already recorded for this item",
        )
        return decision

    def get(self, user_id: str, target_id: str, target_type: TargetType) -> Decision | None:
        row = self.session.execute(
            select(SwipeDecision).where(
                SwipeDecision.user_id == user_id,
                SwipeDecision.target_id == target_id,
                SwipeDecision.target_type == target_type.value,
            )
        ).scalars().first()
        return _to_decision(row) if row is not None else None

    def list_for_user(self, user_id: str) -> list[Decision]:
        rows = self.session.execute(
            select(SwipeDecision)
            .where(SwipeDecision.user_id == user_id)
            .order_by(SwipeDecision.created_at)
        ).scalars()
        return [_to_decision(row) for row in rows]


class SqlConnectionRepository(_SqlRepository, ConnectionRepository):
    def add(self, connection: Connection) -> Connection:
        key = pair_key(connection.user_id, connection.connected_user_id)
        self._insert(
            UserConnection(
                id=connection.id,
                user_id=connection.user_id,
                connected_user_id=connection.connected_user_id,
                pair_key=key,
                created_at=connection.created_at,
            ),
            "Users are already connected",
        )
        return connection

    def find_between(self, first: str, second: str) -> Connection | None:
        row = self.session.execute(
            select(UserConnection).where(UserConnection.pair_key == pair_key(first, second))
        ).scalars().first()
        return _to_connection(row) if row is not None else None

    def list_for_user(self, user_id: str) -> list[Connection]:
        rows = self.session.execute(
            select(UserConnection)
            .where(
                or_(
                    UserConnection.user_id == user_id,
                    UserConnection.connected_user_id == user_id,
                )
            )
            .order_by(UserConnection.created_at)
        ).scalars()
        return [_to_connection(row) for row in rows]

    def remove_between(self, first: str, second: str) -> bool:
        result = self.session.execute(
            delete(UserConnection).where(UserConnection.pair_key == pair_key(first, second))
        )
        return bool(result.rowcount)


class SqlBlockRepository(_SqlRepository, BlockRepository):
    def add(self, block: Block) -> Block:
        if self.exists(block.blocker_id, block.blocked_user_id):
            raise ConflictError("User already blocked")
        self._insert(
            UserBlock(
                id=block.id,
                blocker_id=block.blocker_id,
                blocked_user_id=block.blocked_user_id,
                created_at=block.created_at,
            ),
            "User already blocked",
        )
        return block

    def exists(self, blocker_id: str, blocked_user_id: str) -> bool:
        row = self.session.execute(
            select(UserBlock.id).where(
                UserBlock.blocker_id == blocker_id,
                UserBlock.blocked_user_id == blocked_user_id,
            )
        ).first()
        return row is not None

    def remove(self, blocker_id: str, blocked_user_id: str) -> bool:
        result = self.session.execute(
            delete(UserBlock).where(
                UserBlock.blocker_id == blocker_id,
                UserBlock.blocked_user_id == blocked_user_id,
            )
        )
        return bool(result.rowcount)

    def list_for_blocker(self, blocker_id: str) -> list[Block]:
        rows = self.session.execute(
            select(UserBlock)
            .where(UserBlock.blocker_id == blocker_id)
            .order_by(UserBlock.created_at)
        ).scalars()
        return [_to_block(row) for row in rows]

    def related_user_ids(self, user_id: str) -> set[str]:
        rows = self.session.execute(
            select(UserBlock.blocker_id, UserBlock.blocked_user_id).where(
                or_(UserBlock.blocker_id == user_id, UserBlock.blocked_user_id == user_id)
            )
        ).all()
        return {blocked if blocker == user_id else blocker for blocker, blocked in rows}


class SqlReportRepository(_SqlRepository, ReportRepository):
    def add(self, report: Report) -> Report:
        self._insert(
            UserReport(
                id=report.id,
                reporter_id=report.reporter_id,
                reported_user_id=report.reported_user_id,
                reason=report.reason.value,
                additional_details=report.additional_details,
                created_at=report.created_at,
            ),
            "Report already filed",
        )
        return report

    def list_for_reporter(self, reporter_id: str) -> list[Report]:
        rows = self.session.execute(
            select(UserReport)
            .where(UserReport.reporter_id == reporter_id)
            .order_by(UserReport.created_at)
        ).scalars()
        return [_to_report(row) for row in rows]


class SqlCatalogRepository(_SqlRepository, CatalogRepository):
    def add_event(self, event: EventItem) -> EventItem:
        self._insert(
            CatalogEvent(
                id=event.id,
                name=event.name,
                location=event.location,
                time_label=event.time_label,
                day=event.day,
                tags=list(event.tags),
                recommended=event.recommended,
            ),
            f"Event {event.id} already exists",
        )
        return event

    def upsert_attendee(self, attendee: AttendeeItem) -> AttendeeItem:
        row = self.session.execute(
            select(CatalogAttendee).where(CatalogAttendee.id == attendee.id)
        ).scalars().first()
        if row is None:
            self._insert(
                CatalogAttendee(
                    id=attendee.id,
                    name=attendee.name,
                    role=attendee.role,
                    bio=attendee.bio,
                    tags=list(attendee.tags),
                    recommended=attendee.recommended,
                ),
                f"Attendee {attendee.id} already exists",
            )
            return attendee
        row.name = attendee.name
        row.role = attendee.role
        row.bio = attendee.bio
        row.tags = list(attendee.tags)
        row.recommended = attendee.recommended
        self.session.flush()
        return attendee

    def list_events(self) -> list[EventItem]:
        rows = self.session.execute(select(CatalogEvent).order_by(CatalogEvent.seq)).scalars()
        return [_to_event(row) for row in rows]

    def list_attendees(self) -> list[AttendeeItem]:
        rows = self.session.execute(
            select(CatalogAttendee).order_by(CatalogAttendee.seq)
        ).scalars()
        return [_to_attendee(row) for row in rows]

    def get_events(self, event_ids: Iterable[str]) -> list[EventItem]:
        wanted = list(event_ids)
        if not wanted:
            return []
        rows = self.session.execute(
            select(CatalogEvent).where(CatalogEvent.id.in_(wanted)).order_by(CatalogEvent.seq)
        ).scalars()
        return [_to_event(row) for row in rows]


class SqlRepositories(Repositories):
    """Repositories sharing one SQLAlchemy session as their unit of work."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.decisions = SqlDecisionRepository(session)
        self.connections = SqlConnectionRepository(session)
        self.blocks = SqlBlockRepository(session)
        self.reports = SqlReportRepository(session)
        self.catalog = SqlCatalogRepository(session)

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
