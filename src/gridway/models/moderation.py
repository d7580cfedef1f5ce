"""Models tracking user blocks and reports."""

from datetime import datetime

from sqlalchemy import Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from gridway.db.session import Base
from gridway.db.time import utcnow


class UserBlock(Base):
    """Directional block between two users."""

    __tablename__ = "user_block"
    __table_args__ = (
        UniqueConstraint("blocker_id", "blocked_user_id", name="uq_user_block_pair"),
        Index("ix_user_block_blocked_user_id", "blocked_user_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    blocker_id: Mapped[str] = mapped_column(String(64), nullable=False)
    blocked_user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)


class UserReport(Base):
    """Audit record of a report filed against another user."""

    __tablename__ = "user_report"
    __table_args__ = (Index("ix_user_report_reporter_id", "reporter_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    reporter_id: Mapped[str] = mapped_column(String(64), nullable=False)
    reported_user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    reason: Mapped[str] = mapped_column(String(64), nullable=False)
    additional_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
