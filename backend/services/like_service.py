from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from backend.core.db import storage_guard
from backend.core.errors import (
    InvalidIdentifier,
    NotAuthorized,
    NotFound,
    is_unique_violation,
)
from backend.models.like import Like
from backend.models.user import User
from backend.services.block_service import is_blocked_either_direction
from backend.services.identity_pair import validate_identifier
from backend.services.match_service import create_match

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LikeOutcome:
    matched: bool
    match_id: int | None = None


def _has_like(session: Session, liker_id: int, liked_id: int) -> bool:
    statement = select(Like.id).where(
        Like.liker_id == liker_id,
        Like.liked_id == liked_id,
    )
    return session.exec(statement).first() is not None


def record_like(session: Session, liker_id: int, liked_id: int) -> LikeOutcome:
    """Store the like and create the match when the other side already liked back."""
    liker_id = validate_identifier(liker_id)
    liked_id = validate_identifier(liked_id)
    if liker_id == liked_id:
        raise InvalidIdentifier("Cannot like yourself.")

    if is_blocked_either_direction(session, liker_id, liked_id):
        raise NotAuthorized("Cannot like this user.")

    with storage_guard(session, "record_like"):
        if session.get(User, liked_id) is None:
            raise NotFound("User not found.")

        if not _has_like(session, liker_id, liked_id):
            session.add(Like(liker_id=liker_id, liked_id=liked_id))
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if not is_unique_violation(exc):
                    raise

        mutual = _has_like(session, liked_id, liker_id)

    if not mutual:
        return LikeOutcome(matched=False)

    match_id = create_match(session, liker_id, liked_id)
    logger.info("mutual like between %s and %s -> match %s", liker_id, liked_id, match_id)
    return LikeOutcome(matched=True, match_id=match_id)
