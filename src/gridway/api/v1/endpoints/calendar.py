"""Calendar endpoints derived from event decisions."""

from __future__ import annotations

from fastapi import APIRouter, Query

from gridway.api.v1.dependencies import CalendarServiceDep
from gridway.schemas import CalendarResponse, EventResponse

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", response_model=CalendarResponse)
async def get_calendar(
    service: CalendarServiceDep,
    user_id: str = Query(..., min_length=1),
    day: int | None = Query(None, ge=1, le=31),
) -> CalendarResponse:
    """Return the user's interested events and the days that hold them.

    When ``day`` is given, ``events`` holds only that day's events.
    """
    events = (
        service.interested_events(user_id)
        if day is None
        else service.interested_events_on(user_id, day)
    )
    return CalendarResponse(
        user_id=user_id,
        event_ids=service.interested_event_ids(user_id),
        dates=service.calendar_dates(user_id),
        day=day,
        events=[EventResponse.model_validate(event) for event in events],
    )
