"""Models describing connections between attendees."""

from datetime import datetime

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from gridway.db.session import Base
from gridway.db.time import utcnow


class UserConnection(Base):
    """Connection formed by a right swipe on an attendee.

    Stored once from the side that swiped first; lookups must match
    either column.
    """

    __tablename__ = "connection"
    __table_args__ = (
        Index("ix_connection_user_id", "user_id"),
        Index("ix_connection_connected_user_id", "connected_user_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    connected_user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    # "low|high" of the two ids; unique so a mutual swipe cannot add a second row.
    pair_key: Mapped[str] = mapped_column(String(129), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
