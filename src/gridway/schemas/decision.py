# src/gridway/schemas/decision.py
"""Decision-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gridway.domain import MAX_ID_LENGTH, Direction, TargetType

from .connection import ConnectionResponse


class DecisionCreate(BaseModel):
    """Schema for recording a swipe decision."""

    user_id: str = Field(
        ..., min_length=1, max_length=MAX_ID_LENGTH, description="User making the decision"
    )
    target_id: str = Field(
        ..., min_length=1, max_length=MAX_ID_LENGTH, description="Event or attendee id"
    )
    target_type: TargetType
    direction: Direction = Field(..., description="right means interested / connect")


class DecisionResponse(BaseModel):
    """Schema for a stored decision."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    target_id: str
    target_type: TargetType
    direction: Direction
    created_at: datetime


class DecisionOutcomeResponse(BaseModel):
    """Decision plus the connection it formed, if any.

    ``side_effect_error`` is set when the decision was stored but the
    connection could not be written.
    """

    model_config = ConfigDict(from_attributes=True)

    decision: DecisionResponse
    connection: ConnectionResponse | None = None
    side_effect_error: str | None = None
