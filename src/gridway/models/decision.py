"""Models capturing swipe decisions on events and attendees."""

from datetime import datetime

from sqlalchemy import CheckConstraint, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gridway.db.session import Base
from gridway.db.time import utcnow


class SwipeDecision(Base):
    """Per-user decision on a swipeable item.

    Rows are append-only; the unique key makes a second decision on the
    same item fail instead of overwriting the first.
    """

    __tablename__ = "swipe_decision"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "target_id", "target_type", name="uq_swipe_decision_user_target"
        ),
        CheckConstraint("target_type IN ('event', 'attendee')", name="ck_swipe_decision_target_type"),
        CheckConstraint("direction IN ('left', 'right')", name="ck_swipe_decision_direction"),
        Index("ix_swipe_decision_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    target_id: Mapped[str] = mapped_column(String(64), nullable=False)
    target_type: Mapped[str] = mapped_column(String(16), nullable=False)
    direction: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
