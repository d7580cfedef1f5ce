"""Block endpoints for the Grid Way API."""

from __future__ import annotations

from fastapi import APIRouter, status

from gridway.api.v1.dependencies import ModerationGateDep
from gridway.domain import Block
from gridway.schemas import BlockCreate, BlockResponse, BlockStatus

router = APIRouter(prefix="/blocks", tags=["moderation"])


@router.post("", response_model=BlockResponse, status_code=status.HTTP_201_CREATED)
async def block_user(block_data: BlockCreate, gate: ModerationGateDep) -> Block:
    """Block another attendee; 409 when the block already exists."""
    return gate.block(block_data.blocker_id, block_data.blocked_user_id)


@router.delete("/{blocker_id}/{blocked_user_id}")
async def unblock_user(
    blocker_id: str,
    blocked_user_id: str,
    gate: ModerationGateDep,
) -> dict[str, bool]:
    """Remove a block; 404 when there is none."""
    gate.unblock(blocker_id, blocked_user_id)
    return {"success": True}


@router.get("/{blocker_id}", response_model=list[BlockResponse])
async def list_blocks(blocker_id: str, gate: ModerationGateDep) -> list[Block]:
    """List blocks created by a user."""
    return gate.blocks_of(blocker_id)


@router.get("/{blocker_id}/{blocked_user_id}", response_model=BlockStatus)
async def get_block_status(
    blocker_id: str,
    blocked_user_id: str,
    gate: ModerationGateDep,
) -> BlockStatus:
    """Directional block check."""
    return BlockStatus(is_blocked=gate.is_blocked(blocker_id, blocked_user_id))
