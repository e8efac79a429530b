from __future__ import annotations

import logging

from sqlalchemy import delete, or_
from sqlmodel import Session, select

from backend.core.db import storage_guard
from backend.core.errors import NotFound
from backend.models.blocker import Blocker
from backend.models.like import Like
from backend.models.match import Match
from backend.models.profile_media import ProfileMedia
from backend.models.user import User
from backend.models.video_session import VideoSession
from backend.services.identity_pair import validate_identifier

logger = logging.getLogger(__name__)


def delete_account(session: Session, user_id: int) -> None:
    """Remove the user and every relation row that references them, atomically."""
    user_id = validate_identifier(user_id)

    with storage_guard(session, "delete_account"):
        user = session.get(User, user_id)
        if user is None:
            raise NotFound("User not found.")

        match_ids = select(Match.id).where(
            or_(Match.user_a_id == user_id, Match.user_b_id == user_id)
        )
        try:
            session.execute(
                delete(VideoSession).where(
                    or_(
                        VideoSession.match_id.in_(match_ids),  # type: ignore[attr-defined]
                        VideoSession.caller_id == user_id,
                        VideoSession.callee_id == user_id,
                    )
                )
            )
            session.execute(
                delete(Match).where(
                    or_(Match.user_a_id == user_id, Match.user_b_id == user_id)
                )
            )
            session.execute(
                delete(Like).where(
                    or_(Like.liker_id == user_id, Like.liked_id == user_id)
                )
            )
            session.execute(
                delete(Blocker).where(
                    or_(Blocker.blocker_id == user_id, Blocker.blocked_id == user_id)
                )
            )
            session.execute(delete(ProfileMedia).where(ProfileMedia.user_id == user_id))
            session.delete(user)
            session.commit()
        except Exception:
            session.rollback()
            raise

    logger.info("account %s deleted with all relations", user_id)
