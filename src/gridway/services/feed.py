"""Item catalog and discovery feed construction."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from gridway.core.errors import ValidationError
from gridway.domain import AttendeeItem, EventItem, SwipeableItem, TargetType
from gridway.repositories import Repositories

from .connections import require_id
from .moderation import ModerationGate

logger = logging.getLogger(__name__)


def _clean_tags(tags: Iterable[str]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for tag in tags:
        cleaned = tag.strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return tuple(seen)


class CatalogService:
    """Organizer-facing creation of swipeable items."""

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    def create_event(self, event: EventItem) -> EventItem:
        """Add an event to the catalog; ConflictError if the id is taken."""
        if not event.name.strip():
            raise ValidationError("Event name is required")
        if event.day is not None and not 1 <= event.day <= 31:
            raise ValidationError("Event day must be between 1 and 31")
        stored = self.repos.catalog.add_event(
            EventItem(
                id=require_id(event.id, "id"),
                name=event.name.strip(),
                location=event.location,
                time_label=event.time_label,
                day=event.day,
                tags=_clean_tags(event.tags),
                recommended=event.recommended,
            )
        )
        self.repos.commit()
        logger.info("Created event %s", stored.id)
        return stored

    def import_attendees(self, attendees: Iterable[AttendeeItem]) -> list[AttendeeItem]:
        """Insert or refresh roster entries by id; the whole batch commits together.

        A rejected entry discards every upsert made earlier in the batch.
        """
        imported: list[AttendeeItem] = []
        try:
            for attendee in attendees:
                if not attendee.name.strip():
                    raise ValidationError(f"Attendee {attendee.id} has no name")
                imported.append(
                    self.repos.catalog.upsert_attendee(
                        AttendeeItem(
                            id=require_id(attendee.id, "id"),
                            name=attendee.name.strip(),
                            role=attendee.role,
                            bio=attendee.bio,
                            tags=_clean_tags(attendee.tags),
                            recommended=attendee.recommended,
                        )
                    )
                )
        except Exception:
            self.repos.rollback()
            raise
        self.repos.commit()
        logger.info("Imported %d attendees", len(imported))
        return imported

    def list_events(self) -> list[EventItem]:
        return self.repos.catalog.list_events()

    def list_attendees(self) -> list[AttendeeItem]:
        return self.repos.catalog.list_attendees()


class DiscoveryFeed:
    """Build the ordered candidate queue handed to the card stack.

    Moderation is applied here, before presentation, so a blocked user never
    reaches the client.
    """

    def __init__(self, repos: Repositories, gate: ModerationGate | None = None) -> None:
        self.repos = repos
        self.gate = gate or ModerationGate(repos)

    def build_feed(
        self,
        viewer_id: str,
        kind: TargetType | str,
        tag: str | None = None,
    ) -> list[SwipeableItem]:
        """Return undecided, visible candidates of ``kind`` for ``viewer_id``.

        Recommended items come first; otherwise catalog order is kept.
        """
        viewer_id = require_id(viewer_id, "viewer_id")
        try:
            kind = TargetType(kind)
        except ValueError as err:
            raise ValidationError(f"Unknown feed kind: {kind}") from err

        items: list[SwipeableItem]
        if kind is TargetType.EVENT:
            items = list(self.repos.catalog.list_events())
        else:
            items = list(self.repos.catalog.list_attendees())

        decided = {
            d.target_id
            for d in self.repos.decisions.list_for_user(viewer_id)
            if d.target_type is kind
        }
        candidates = [item for item in items if item.id not in decided]
        candidates = self.gate.visible_candidates(viewer_id, candidates)

        if tag and tag.strip():
            wanted = tag.strip().lower()
            candidates = [
                item for item in candidates if wanted in (t.lower() for t in item.tags)
            ]

        # sorted() is stable, so catalog order survives within each group.
        return sorted(candidates, key=lambda item: not item.recommended)
