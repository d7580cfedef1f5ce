# src/gridway/schemas/moderation.py
"""Block and report Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from gridway.domain import MAX_ID_LENGTH, ReportReason


class BlockCreate(BaseModel):
    """Schema for blocking another attendee."""

    blocker_id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    blocked_user_id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)


class BlockResponse(BaseModel):
    """Schema for block information returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    blocker_id: str
    blocked_user_id: str
    created_at: datetime


class BlockStatus(BaseModel):
    """Directional block check result."""

    is_blocked: bool


class ReportCreate(BaseModel):
    """Schema for reporting another attendee."""

    reporter_id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    reported_user_id: str = Field(..., min_length=1, max_length=MAX_ID_LENGTH)
    reason: ReportReason
    additional_details: str | None = Field(None, max_length=2000)
    also_block: bool = Field(False, description="Block the reported user in the same action")


class ReportResponse(BaseModel):
    """Schema for a filed report."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    reporter_id: str
    reported_user_id: str
    reason: ReportReason
    additional_details: str | None
    created_at: datetime


class ReportOutcomeResponse(BaseModel):
    """Report plus the result of the optional block."""

    model_config = ConfigDict(from_attributes=True)

    report: ReportResponse
    blocked: bool = False
    already_blocked: bool = False
