"""Swipe decision recording."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from gridway.core.errors import DownstreamUnavailableError, ValidationError
from gridway.core.settings import settings
from gridway.domain import Connection, Decision, Direction, TargetType
from gridway.repositories import Repositories

from .connections import ConnectionService, require_id

logger = logging.getLogger(__name__)

EnumT = TypeVar("EnumT", bound=Enum)


@dataclass(frozen=True)
class DecisionOutcome:
    """Result of recording a decision.

    ``connection`` is set when the decision formed (or reused) a connection;
    ``side_effect_error`` carries the reason when connection formation
    failed after the decision itself was stored.
    """

    decision: Decision
    connection: Connection | None = None
    side_effect_error: str | None = None


def _coerce(enum_type: type[EnumT], value: EnumT | str, field_name: str) -> EnumT:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().lower())
    except ValueError as err:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from err


class SwipeDecisionService:
    """Authoritative, idempotent-once recorder of swipe decisions."""

    def __init__(
        self,
        repos: Repositories,
        connections: ConnectionService | None = None,
        *,
        atomic_connections: bool | None = None,
    ) -> None:
        self.repos = repos
        self.connections = connections or ConnectionService(repos)
        self.atomic_connections = (
            settings.atomic_connection_formation
            if atomic_connections is None
            else atomic_connections
        )

    def record_decision(
        self,
        user_id: str,
        target_id: str,
        target_type: TargetType | str,
        direction: Direction | str,
    ) -> DecisionOutcome:
        """Validate and persist a single decision.

        Args:
            user_id: User making the decision
            target_id: Event or attendee identifier
            target_type: ``event`` or ``attendee``
            direction: ``left`` or ``right``

        Returns:
            The stored decision and any connection it formed

        Raises:
            ValidationError: If the request is malformed
            ConflictError: If the user already decided on this target
            DownstreamUnavailableError: If atomic mode is enabled and the
                connection write failed
        """
        decision = Decision(
            user_id=require_id(user_id, "user_id"),
            target_id=require_id(target_id, "target_id"),
            target_type=_coerce(TargetType, target_type, "target_type"),
            direction=_coerce(Direction, direction, "direction"),
        )
        if decision.target_type is TargetType.ATTENDEE and decision.user_id == decision.target_id:
            raise ValidationError("Users cannot swipe on themselves")

        self.repos.decisions.add(decision)
        logger.info(
            "Recorded %s swipe by %s on %s %s",
            decision.direction.value,
            decision.user_id,
            decision.target_type.value,
            decision.target_id,
        )

        if not decision.forms_connection:
            self.repos.commit()
            return DecisionOutcome(decision=decision)

        if self.atomic_connections:
            return self._record_with_connection_atomically(decision)
        return self._record_with_connection_best_effort(decision)

    def _record_with_connection_atomically(self, decision: Decision) -> DecisionOutcome:
        try:
            connection = self.connections.form_connection(decision.user_id, decision.target_id)
        except Exception as exc:
            self.repos.rollback()
            logger.warning(
                "Connection formation failed for decision %s; rolled back",
                decision.id,
                exc_info=True,
            )
            raise DownstreamUnavailableError("Could not form connection") from exc
        self.repos.commit()
        return DecisionOutcome(decision=decision, connection=connection)

    def _record_with_connection_best_effort(self, decision: Decision) -> DecisionOutcome:
        self.repos.commit()
        try:
            connection = self.connections.form_connection(decision.user_id, decision.target_id)
            self.repos.commit()
        except Exception as exc:
            self.repos.rollback()
            logger.warning(
                "Decision %s stored but connection formation failed: %s",
                decision.id,
                exc,
                exc_info=True,
            )
            return DecisionOutcome(decision=decision, side_effect_error=str(exc))
        return DecisionOutcome(decision=decision, connection=connection)

    def decisions_of(self, user_id: str) -> list[Decision]:
        """Return every decision recorded for ``user_id``."""
        return self.repos.decisions.list_for_user(require_id(user_id, "user_id"))
