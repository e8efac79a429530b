"""Directional block rows exposed as a symmetric "is hidden" predicate."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

from sqlalchemy import and_, desc, exists, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import ColumnElement
from sqlalchemy.sql.schema import Table
from sqlmodel import Session, select

from backend.core.db import storage_guard
from backend.core.errors import InvalidIdentifier, NotFound, is_unique_violation
from backend.models.blocker import Blocker, BlockedUserOut
from backend.models.user import User
from backend.services.identity_pair import validate_identifier

logger = logging.getLogger(__name__)

BLOCKER_TABLE = cast(Table, Blocker.__table__)  # type: ignore[attr-defined]


def _directional(blocker_id: Any, blocked_id: Any) -> ColumnElement[bool]:
    return and_(
        BLOCKER_TABLE.c.blocker_id == blocker_id,
        BLOCKER_TABLE.c.blocked_id == blocked_id,
    )


def _either_direction(first: Any, second: Any) -> ColumnElement[bool]:
    return or_(_directional(first, second), _directional(second, first))


def not_blocked_either_direction(
    viewer_id: int,
    candidate_column: Any,
) -> ColumnElement[bool]:
    """SQL predicate: no block row between viewer and candidate, in either direction."""
    block_exists = exists(
        select(BLOCKER_TABLE.c.id).where(
            _either_direction(viewer_id, candidate_column)
        )
    )
    return cast(ColumnElement[bool], ~block_exists)


def _find_block(session: Session, blocker_id: int, blocked_id: int) -> Blocker | None:
    return session.exec(
        select(Blocker).where(_directional(blocker_id, blocked_id))
    ).first()


def _blocked_out(row: Blocker, user: User | None) -> BlockedUserOut:
    return BlockedUserOut(
        id=cast(int, row.id),
        blocked_id=row.blocked_id,
        name=user.name if user else None,
        image=user.image if user else None,
        created_at=row.created_at,
        notes=row.notes,
    )


@dataclass(slots=True)
class BlockState:
    is_blocked: bool
    is_blocked_by: bool

    @property
    def hidden(self) -> bool:
        return self.is_blocked or self.is_blocked_by


def _validate_pair(first: Any, second: Any, *, message: str) -> tuple[int, int]:
    first_id = validate_identifier(first)
    second_id = validate_identifier(second)
    if first_id == second_id:
        raise InvalidIdentifier(message)
    return first_id, second_id


def get_block_state(session: Session, viewer_id: int, target_id: int) -> BlockState:
    viewer_id, target_id = _validate_pair(
        viewer_id, target_id, message="Block state needs two distinct users."
    )
    with storage_guard(session, "get_block_state"):
        rows = session.exec(
            select(Blocker).where(_either_direction(viewer_id, target_id))
        ).all()
    is_blocked = any(
        row.blocker_id == viewer_id and row.blocked_id == target_id for row in rows
    )
    is_blocked_by = any(
        row.blocker_id == target_id and row.blocked_id == viewer_id for row in rows
    )
    return BlockState(is_blocked=is_blocked, is_blocked_by=is_blocked_by)


def is_blocked_either_direction(session: Session, a: int, b: int) -> bool:
    return get_block_state(session, a, b).hidden


def blocked_counterparts(session: Session, viewer_id: int) -> set[int]:
    """Every user hidden from viewer_id, whichever side created the block."""
    viewer_id = validate_identifier(viewer_id)
    with storage_guard(session, "blocked_counterparts"):
        rows = session.exec(
            select(BLOCKER_TABLE.c.blocker_id, BLOCKER_TABLE.c.blocked_id).where(
                or_(
                    BLOCKER_TABLE.c.blocker_id == viewer_id,
                    BLOCKER_TABLE.c.blocked_id == viewer_id,
                )
            )
        ).all()
    return {
        blocked_id if blocker_id == viewer_id else blocker_id
        for blocker_id, blocked_id in rows
    }


def block(session: Session, blocker_id: int, blocked_id: int) -> bool:
    """Create the block row if absent.

    Returns True when a new row was created, False when it already existed.
    """
    blocker_id, blocked_id = _validate_pair(
        blocker_id, blocked_id, message="Cannot block yourself."
    )

    with storage_guard(session, "block"):
        if _find_block(session, blocker_id, blocked_id) is not None:
            return False

        session.add(Blocker(blocker_id=blocker_id, blocked_id=blocked_id))
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            if not is_unique_violation(exc):
                raise
            return False

    logger.info("user %s blocked user %s", blocker_id, blocked_id)
    return True


def unblock(session: Session, blocker_id: int, blocked_id: int) -> bool:
    blocker_id, blocked_id = _validate_pair(
        blocker_id, blocked_id, message="Cannot unblock yourself."
    )

    with storage_guard(session, "unblock"):
        row = _find_block(session, blocker_id, blocked_id)
        if row is None:
            return False
        session.delete(row)
        session.commit()

    logger.info("user %s unblocked user %s", blocker_id, blocked_id)
    return True


def update_block_notes(
    session: Session,
    blocker_id: int,
    blocked_id: int,
    notes: str | None,
) -> BlockedUserOut:
    blocker_id, blocked_id = _validate_pair(
        blocker_id, blocked_id, message="Cannot annotate a block on yourself."
    )

    with storage_guard(session, "update_block_notes"):
        row = _find_block(session, blocker_id, blocked_id)
        if row is None:
            raise NotFound("Block not found.")
        row.notes = notes or None
        session.add(row)
        session.commit()
        session.refresh(row)
        user = session.get(User, blocked_id)
    return _blocked_out(row, user)


def list_blocked(session: Session, blocker_id: int) -> list[BlockedUserOut]:
    blocker_id = validate_identifier(blocker_id)
    with storage_guard(session, "list_blocked"):
        rows = session.exec(
            select(Blocker, User)
            .join(User, User.id == Blocker.blocked_id)
            .where(Blocker.blocker_id == blocker_id)
            .order_by(desc(BLOCKER_TABLE.c.created_at), desc(BLOCKER_TABLE.c.id))
        ).all()
    return [_blocked_out(row, user) for row, user in rows]
