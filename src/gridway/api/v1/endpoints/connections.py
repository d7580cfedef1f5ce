"""Connection endpoints for the Grid Way API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from gridway.api.v1.dependencies import ConnectionServiceDep
from gridway.domain import Connection
from gridway.schemas import ConnectionResponse

router = APIRouter(prefix="/connections", tags=["connections"])


@router.get("", response_model=list[ConnectionResponse])
async def list_connections(
    service: ConnectionServiceDep,
    user_id: str = Query(..., min_length=1),
) -> list[Connection]:
    """List connections where the user appears on either side."""
    return service.connections_of(user_id)


@router.delete("/{user_id}/{other_id}")
async def remove_connection(
    user_id: str,
    other_id: str,
    service: ConnectionServiceDep,
) -> dict[str, bool]:
    """Remove a connection in either ordering; 404 when the users are not connected."""
    service.remove_connection(user_id, other_id)
    return {"success": True}
