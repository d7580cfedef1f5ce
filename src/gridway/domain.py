"""
Domain models - core swipe engine entities

These records are what repositories hand back regardless of the storage
backend, so services never depend on ORM instances.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from gridway.db.time import utcnow


class TargetType(str, Enum):
    """Kind of item a decision is made on."""
    EVENT = "event"
    ATTENDEE = "attendee"


class Direction(str, Enum):
    """Swipe direction; right means interested / connect."""
    LEFT = "left"
    RIGHT = "right"


class ReportReason(str, Enum):
    """Reasons offered when reporting another attendee."""
    HARASSMENT = "Harassment or bullying"
    INAPPROPRIATE_CONTENT = "Inappropriate content"
    SPAM = "Spam or scam"
    FAKE_PROFILE = "Fake profile"
    OFFENSIVE_BEHAVIOR = "Offensive behavior"
    PRIVACY_VIOLATION = "Privacy violation"
    OTHER = "Other"


# Longest user, event or attendee id the tables can hold.
MAX_ID_LENGTH = 64


def new_id() -> str:
    """Return an opaque identifier for a new record."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Decision:
    """A single user's swipe on one item."""
    user_id: str
    target_id: str
    target_type: TargetType
    direction: Direction
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    @property
    def key(self) -> tuple[str, str, TargetType]:
        return (self.user_id, self.target_id, self.target_type)

    @property
    def forms_connection(self) -> bool:
        return self.target_type is TargetType.ATTENDEE and self.direction is Direction.RIGHT

    @property
    def marks_interest(self) -> bool:
        return self.target_type is TargetType.EVENT and self.direction is Direction.RIGHT


@dataclass(frozen=True)
class Connection:
    """Symmetric relation stored once, from the side that swiped first."""
    user_id: str
    connected_user_id: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def involves(self, user_id: str) -> bool:
        return user_id in (self.user_id, self.connected_user_id)

    def other_party(self, user_id: str) -> str:
        """Return the id on the opposite side of ``user_id``."""
        return self.connected_user_id if self.user_id == user_id else self.user_id


def pair_key(first: str, second: str) -> str:
    """Order-independent key for a pair of user ids."""
    low, high = sorted((first, second))
    return f"{low}|{high}"


@dataclass(frozen=True)
class Block:
    """Directional block; A blocking B says nothing about B blocking A."""
    blocker_id: str
    blocked_user_id: str
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Report:
    """Append-only moderation report."""
    reporter_id: str
    reported_user_id: str
    reason: ReportReason
    additional_details: str | None = None
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class EventItem:
    """Swipeable event card."""
    id: str
    name: str
    location: str = ""
    time_label: str = ""
    day: int | None = None
    tags: tuple[str, ...] = ()
    recommended: bool = False

    kind = TargetType.EVENT


@dataclass(frozen=True)
class AttendeeItem:
    """Swipeable attendee card; ``id`` is the attendee's user id."""
    id: str
    name: str
    role: str = ""
    bio: str = ""
    tags: tuple[str, ...] = ()
    recommended: bool = False

    kind = TargetType.ATTENDEE


SwipeableItem = EventItem | AttendeeItem
