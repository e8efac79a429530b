from __future__ import annotations

from fastapi import APIRouter
from sqlmodel import SQLModel

from backend.models.blocker import BlockCreate, BlockedUserOut, BlockNotesUpdate
from backend.routers.deps import CurrentUserIdDep, SessionDep
from backend.services.block_service import (
    block,
    list_blocked,
    unblock,
    update_block_notes,
)

router = APIRouter(prefix="/blockers", tags=["blockers"])


class BlockResult(SQLModel):
    ok: bool = True
    changed: bool


@router.get("", response_model=list[BlockedUserOut])
def list_my_blocks(current_id: CurrentUserIdDep, session: SessionDep) -> list[BlockedUserOut]:
    return list_blocked(session, current_id)


@router.post("", response_model=BlockResult)
def create_block(
    payload: BlockCreate,
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> BlockResult:
    created = block(session, current_id, payload.blocked_id)
    return BlockResult(changed=created)


@router.patch("", response_model=BlockedUserOut)
def annotate_block(
    payload: BlockNotesUpdate,
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> BlockedUserOut:
    return update_block_notes(session, current_id, payload.blocked_id, payload.notes)


@router.delete("", response_model=BlockResult)
def delete_block(
    payload: BlockCreate,
    current_id: CurrentUserIdDep,
    session: SessionDep,
) -> BlockResult:
    removed = unblock(session, current_id, payload.blocked_id)
    return BlockResult(changed=removed)
