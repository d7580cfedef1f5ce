"""Swipe decision endpoints for the Grid Way API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from gridway.api.v1.dependencies import DecisionServiceDep
from gridway.domain import Decision
from gridway.schemas import DecisionCreate, DecisionOutcomeResponse, DecisionResponse
from gridway.services import DecisionOutcome

router = APIRouter(prefix="/decisions", tags=["decisions"])


@router.post("", response_model=DecisionOutcomeResponse, status_code=status.HTTP_201_CREATED)
async def record_decision(
    decision_data: DecisionCreate,
    service: DecisionServiceDep,
) -> DecisionOutcome:
    """Record a swipe decision.

    A right swipe on an attendee also forms the connection between the two
    users. Repeating a decision on the same target returns 409.

    Args:
        decision_data: Decision payload
        service: Swipe decision service

    Returns:
        The stored decision and any connection it formed
    """
    return service.record_decision(
        decision_data.user_id,
        decision_data.target_id,
        decision_data.target_type,
        decision_data.direction,
    )


@router.get("", response_model=list[DecisionResponse])
async def list_decisions(
    service: DecisionServiceDep,
    user_id: str = Query(..., min_length=1),
) -> list[Decision]:
    """List every decision made by a user."""
    return service.decisions_of(user_id)
