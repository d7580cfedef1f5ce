"""Report endpoints for the Grid Way API."""

from __future__ import annotations

from fastapi import APIRouter, status

from gridway.api.v1.dependencies import ModerationGateDep
from gridway.domain import Report
from gridway.schemas import ReportCreate, ReportOutcomeResponse, ReportResponse
from gridway.services import ReportOutcome

router = APIRouter(prefix="/reports", tags=["moderation"])


@router.post("", response_model=ReportOutcomeResponse, status_code=status.HTTP_201_CREATED)
async def create_report(report_data: ReportCreate, gate: ModerationGateDep) -> ReportOutcome:
    """File a report, optionally blocking the reported user as well.

    With ``also_block`` an existing block is reported as ``already_blocked``
    rather than an error.
    """
    return gate.report_and_block(
        report_data.reporter_id,
        report_data.reported_user_id,
        report_data.reason,
        report_data.additional_details,
        also_block=report_data.also_block,
    )


@router.get("/{reporter_id}", response_model=list[ReportResponse])
async def list_reports(reporter_id: str, gate: ModerationGateDep) -> list[Report]:
    """List reports filed by a user."""
    return gate.reports_of(reporter_id)
