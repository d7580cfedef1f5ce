"""Connection formation between attendees."""

from __future__ import annotations

import logging

from gridway.core.errors import ConflictError, NotFoundError, ValidationError
from gridway.domain import MAX_ID_LENGTH, Connection
from gridway.repositories import Repositories

logger = logging.getLogger(__name__)


def require_id(value: str | None, field_name: str) -> str:
    """Return a stripped identifier or raise ValidationError when blank or too long."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field_name} is required")
    if len(cleaned) > MAX_ID_LENGTH:
        raise ValidationError(f"{field_name} must be at most {MAX_ID_LENGTH} characters")
    return cleaned


class ConnectionService:
    """Maintain the connection graph derived from right swipes on attendees."""

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    def form_connection(self, user_id: str, target_user_id: str) -> Connection:
        """Create the connection between two users, or return the existing one.

        A reverse right swipe after the pair is already connected reuses the
        first record. The write is left uncommitted so the caller controls
        the unit of work.

        Args:
            user_id: User who swiped right
            target_user_id: Attendee that was swiped on

        Returns:
            The canonical connection for the pair
        """
        user_id = require_id(user_id, "user_id")
        target_user_id = require_id(target_user_id, "target_user_id")
        if user_id == target_user_id:
            raise ValidationError("Users cannot connect with themselves")

        existing = self.repos.connections.find_between(user_id, target_user_id)
        if existing is not None:
            logger.debug(
                "Connection between %s and %s already exists (%s)",
                user_id,
                target_user_id,
                existing.id,
            )
            return existing

        try:
            connection = self.repos.connections.add(
                Connection(user_id=user_id, connected_user_id=target_user_id)
            )
        except ConflictError:
            # Lost a race with the other party's swipe; theirs is canonical.
            existing = self.repos.connections.find_between(user_id, target_user_id)
            if existing is None:
                raise
            return existing

        logger.info("Connected %s with %s (%s)", user_id, target_user_id, connection.id)
        return connection

    def connections_of(self, user_id: str) -> list[Connection]:
        """Return connections where ``user_id`` appears on either side."""
        return self.repos.connections.list_for_user(require_id(user_id, "user_id"))

    def remove_connection(self, user_id: str, other_id: str) -> None:
        """Remove the connection between two users in either ordering.

        Raises:
            NotFoundError: If the users are not connected
        """
        user_id = require_id(user_id, "user_id")
        other_id = require_id(other_id, "other_id")
        if not self.repos.connections.remove_between(user_id, other_id):
            raise NotFoundError("Connection not found")
        self.repos.commit()
        logger.info("Removed connection between %s and %s", user_id, other_id)
