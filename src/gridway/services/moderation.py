"""Moderation gate: blocks, reports and candidate filtering."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from gridway.core.errors import ConflictError, NotFoundError, ValidationError
from gridway.domain import Block, Report, ReportReason, SwipeableItem, TargetType
from gridway.repositories import Repositories

from .connections import require_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportOutcome:
    """Result of the report (and optional block) user action."""

    report: Report
    blocked: bool = False
    already_blocked: bool = False


class ModerationGate:
    """Service handling blocks, reports and feed visibility."""

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    def visible_candidates(
        self,
        viewer_id: str,
        items: Iterable[SwipeableItem],
    ) -> list[SwipeableItem]:
        """Filter a candidate set down to what ``viewer_id`` may see.

        Attendees are hidden when either side has blocked the other, and the
        viewer never sees their own card. Events are not subject to blocking.
        """
        viewer_id = require_id(viewer_id, "viewer_id")
        hidden: set[str] | None = None
        visible: list[SwipeableItem] = []
        for item in items:
            if item.kind is TargetType.ATTENDEE:
                if hidden is None:
                    hidden = self.repos.blocks.related_user_ids(viewer_id)
                    hidden.add(viewer_id)
                if item.id in hidden:
                    continue
            visible.append(item)
        return visible

    def is_blocked(self, blocker_id: str, blocked_user_id: str) -> bool:
        """Directional block check."""
        return self.repos.blocks.exists(
            require_id(blocker_id, "blocker_id"),
            require_id(blocked_user_id, "blocked_user_id"),
        )

    def block(self, blocker_id: str, blocked_user_id: str) -> Block:
        """Block a user.

        Raises:
            ValidationError: If a user tries to block themselves
            ConflictError: If the block already exists
        """
        blocker_id = require_id(blocker_id, "blocker_id")
        blocked_user_id = require_id(blocked_user_id, "blocked_user_id")
        if blocker_id == blocked_user_id:
            raise ValidationError("Users cannot block themselves")

        block = self.repos.blocks.add(Block(blocker_id=blocker_id, blocked_user_id=blocked_user_id))
        self.repos.commit()
        logger.info("User %s blocked %s", blocker_id, blocked_user_id)
        return block

    def unblock(self, blocker_id: str, blocked_user_id: str) -> None:
        """Remove a block; NotFoundError when there is none."""
        blocker_id = require_id(blocker_id, "blocker_id")
        blocked_user_id = require_id(blocked_user_id, "blocked_user_id")
        if not self.repos.blocks.remove(blocker_id, blocked_user_id):
            raise NotFoundError("Block not found")
        self.repos.commit()
        logger.info("User %s unblocked %s", blocker_id, blocked_user_id)

    def blocks_of(self, blocker_id: str) -> list[Block]:
        return self.repos.blocks.list_for_blocker(require_id(blocker_id, "blocker_id"))

    def report(
        self,
        reporter_id: str,
        reported_user_id: str,
        reason: ReportReason | str,
        additional_details: str | None = None,
    ) -> Report:
        """File a report against another user."""
        reporter_id = require_id(reporter_id, "reporter_id")
        reported_user_id = require_id(reported_user_id, "reported_user_id")
        if reporter_id == reported_user_id:
            raise ValidationError("Users cannot report themselves")
        try:
            reason = ReportReason(reason)
        except ValueError as err:
            raise ValidationError(f"Unknown report reason: {reason}") from err

        details = (additional_details or "").strip() or None
        report = self.repos.reports.add(
            Report(
                reporter_id=reporter_id,
                reported_user_id=reported_user_id,
                reason=reason,
                additional_details=details,
            )
        )
        self.repos.commit()
        logger.info(
            "User %s reported %s (%s) as %s",
            reporter_id,
            reported_user_id,
            report.id,
            reason.value,
        )
        return report

    def report_and_block(
        self,
        reporter_id: str,
        reported_user_id: str,
        reason: ReportReason | str,
        additional_details: str | None = None,
        *,
        also_block: bool = False,
    ) -> ReportOutcome:
        """Report a user and optionally block them in the same user action.

        An existing block is treated as success.
        """
        report = self.report(reporter_id, reported_user_id, reason, additional_details)
        if not also_block:
            return ReportOutcome(report=report)
        try:
            self.block(report.reporter_id, report.reported_user_id)
        except ConflictError:
            return ReportOutcome(report=report, blocked=True, already_blocked=True)
        return ReportOutcome(report=report, blocked=True)

    def reports_of(self, reporter_id: str) -> list[Report]:
        return self.repos.reports.list_for_reporter(require_id(reporter_id, "reporter_id"))
