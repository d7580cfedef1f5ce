# src/gridway/schemas/catalog.py
"""Catalog and feed Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, Field

from gridway.domain import MAX_ID_LENGTH, TargetType


class EventCreate(BaseModel):
    """Schema for adding an event to the catalog."""

    id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field("", max_length=255)
    time_label: str = Field("", max_length=64, description="Display time, e.g. '9:00 AM'")
    day: int | None = Field(None, ge=1, le=31, description="Day of month")
    tags: list[str] = Field(default_factory=list)
    recommended: bool = False


class EventResponse(BaseModel):
    """Schema for a catalog event."""

    model_config = ConfigDict(from_attributes=True)

    kind: TargetType = TargetType.EVENT
    id: str
    name: str
    location: str
    time_label: str
    day: int | None
    tags: list[str]
    recommended: bool


class AttendeeIn(BaseModel):
    """Schema for one roster entry in an attendee import."""

    id: str = Field(
        ..., min_length=1, max_length=MAX_ID_LENGTH, description="The attendee's user id"
    )
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field("", max_length=255)
    bio: str = ""
    tags: list[str] = Field(default_factory=list)
    recommended: bool = False


class AttendeeResponse(BaseModel):
    """Schema for a roster entry."""

    model_config = ConfigDict(from_attributes=True)

    kind: TargetType = TargetType.ATTENDEE
    id: str
    name: str
    role: str
    bio: str
    tags: list[str]
    recommended: bool


class CalendarResponse(BaseModel):
    """Derived calendar view for one user."""

    user_id: str
    event_ids: list[str]
    dates: list[int]
    day: int | None = None
    events: list[EventResponse]
