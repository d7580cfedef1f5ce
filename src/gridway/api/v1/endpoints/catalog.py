"""Catalog and discovery feed endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from gridway.api.v1.dependencies import CatalogServiceDep, DiscoveryFeedDep
from gridway.domain import AttendeeItem, EventItem
from gridway.schemas import AttendeeIn, AttendeeResponse, EventCreate, EventResponse

router = APIRouter(tags=["catalog"])


def _item_response(item: EventItem | AttendeeItem) -> EventResponse | AttendeeResponse:
    if isinstance(item, EventItem):
        return EventResponse.model_validate(item)
    return AttendeeResponse.model_validate(item)


@router.post("/events", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(event_data: EventCreate, catalog: CatalogServiceDep) -> EventResponse:
    """Add an event to the catalog; 409 when the id is taken."""
    event = catalog.create_event(
        EventItem(
            id=event_data.id,
            name=event_data.name,
            location=event_data.location,
            time_label=event_data.time_label,
            day=event_data.day,
            tags=tuple(event_data.tags),
            recommended=event_data.recommended,
        )
    )
    return EventResponse.model_validate(event)


@router.get("/events", response_model=list[EventResponse])
async def list_events(catalog: CatalogServiceDep) -> list[EventResponse]:
    return [EventResponse.model_validate(event) for event in catalog.list_events()]


@router.post("/attendees", response_model=list[AttendeeResponse])
async def import_attendees(
    attendees: list[AttendeeIn],
    catalog: CatalogServiceDep,
) -> list[AttendeeResponse]:
    """Insert or refresh roster entries by id."""
    imported = catalog.import_attendees(
        AttendeeItem(
            id=attendee.id,
            name=attendee.name,
            role=attendee.role,
            bio=attendee.bio,
            tags=tuple(attendee.tags),
            recommended=attendee.recommended,
        )
        for attendee in attendees
    )
    return [AttendeeResponse.model_validate(attendee) for attendee in imported]


@router.get("/attendees", response_model=list[AttendeeResponse])
async def list_attendees(catalog: CatalogServiceDep) -> list[AttendeeResponse]:
    return [AttendeeResponse.model_validate(attendee) for attendee in catalog.list_attendees()]


@router.get("/feed/{kind}", response_model=list[EventResponse | AttendeeResponse])
async def get_feed(
    kind: str,
    feed: DiscoveryFeedDep,
    user_id: str = Query(..., min_length=1),
    tag: str | None = Query(None),
) -> list[EventResponse | AttendeeResponse]:
    """Return the ordered candidates the viewer has not decided on yet.

    Blocked attendees (in either direction) and the viewer are left out;
    recommended items come first.
    """
    return [_item_response(item) for item in feed.build_feed(user_id, kind, tag)]
