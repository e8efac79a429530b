"""Access predicate applied before any other user's data leaves the API.

Listing endpoints filter blocked counterparts inside the query itself so
totals and page boundaries never reveal that a hidden user exists.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import cast

from sqlalchemy import case, desc, nulls_last, or_
from sqlalchemy.sql.schema import Table
from sqlmodel import Session, select

from backend.core.db import storage_guard
from backend.core.errors import NotFound
from backend.models.like import Like, LikerOut
from backend.models.match import Match
from backend.models.profile_media import MediaType, ProfileMedia
from backend.models.user import User, UserSummary
from backend.models.video_session import PastSessionOut, VideoSession
from backend.services.block_service import (
    blocked_counterparts,
    is_blocked_either_direction,
    not_blocked_either_direction,
)
from backend.services.identity_pair import validate_identifier
from backend.services.profile_service import first_photo_urls, list_media, summarize_user

LIKE_TABLE = cast(Table, Like.__table__)  # type: ignore[attr-defined]
MATCH_TABLE = cast(Table, Match.__table__)  # type: ignore[attr-defined]
SESSION_TABLE = cast(Table, VideoSession.__table__)  # type: ignore[attr-defined]


def can_view(session: Session, viewer_id: int, target_id: int) -> bool:
    viewer_id = validate_identifier(viewer_id)
    target_id = validate_identifier(target_id)
    if viewer_id == target_id:
        return True
    return not is_blocked_either_direction(session, viewer_id, target_id)


def filter_listing(
    session: Session,
    viewer_id: int,
    candidate_ids: Iterable[int],
) -> list[int]:
    """Drop hidden candidates, keeping input order and duplicates."""
    viewer_id = validate_identifier(viewer_id)
    candidates = [validate_identifier(candidate) for candidate in candidate_ids]
    if not candidates:
        return []
    hidden = blocked_counterparts(session, viewer_id)
    return [candidate for candidate in candidates if candidate not in hidden]


def list_likers(session: Session, viewer_id: int, *, limit: int) -> list[LikerOut]:
    viewer_id = validate_identifier(viewer_id)
    statement = (
        select(Like, User)
        .join(User, User.id == LIKE_TABLE.c.liker_id)
        .where(LIKE_TABLE.c.liked_id == viewer_id)
        .where(not_blocked_either_direction(viewer_id, LIKE_TABLE.c.liker_id))
        .order_by(desc(LIKE_TABLE.c.created_at), desc(LIKE_TABLE.c.id))
        .limit(limit)
    )
    with storage_guard(session, "list_likers"):
        rows = list(session.exec(statement).all())
        photos = first_photo_urls(session, [like.liker_id for like, _ in rows])

    return [
        LikerOut(
            user=summarize_user(user, photos.get(like.liker_id)),
            liked_at=like.created_at,
        )
        for like, user in rows
    ]


def list_past_sessions(session: Session, viewer_id: int) -> list[PastSessionOut]:
    viewer_id = validate_identifier(viewer_id)
    other_id = case(
        (MATCH_TABLE.c.user_a_id == viewer_id, MATCH_TABLE.c.user_b_id),
        else_=MATCH_TABLE.c.user_a_id,
    )
    statement = (
        select(VideoSession, other_id)
        .join(Match, MATCH_TABLE.c.id == SESSION_TABLE.c.match_id)
        .where(
            or_(
                MATCH_TABLE.c.user_a_id == viewer_id,
                MATCH_TABLE.c.user_b_id == viewer_id,
            )
        )
        .where(not_blocked_either_direction(viewer_id, other_id))
        .order_by(nulls_last(desc(SESSION_TABLE.c.started_at)), desc(SESSION_TABLE.c.id))
    )
    with storage_guard(session, "list_past_sessions"):
        rows: Sequence[tuple[VideoSession, int]] = session.exec(statement).all()

    return [
        PastSessionOut(
            id=cast(int, video.id),
            match_id=video.match_id,
            other_user_id=int(counterpart),
            caller_id=video.caller_id,
            callee_id=video.callee_id,
            state=video.state,
            started_at=video.started_at,
            ended_at=video.ended_at,
        )
        for video, counterpart in rows
    ]


@dataclass(slots=True)
class VisibleProfile:
    user: UserSummary
    media: list[ProfileMedia]


def get_visible_profile(
    session: Session,
    viewer_id: int,
    target_id: int,
) -> VisibleProfile:
    """Profile detail; a profile hidden by a block reads as missing."""
    target_id = validate_identifier(target_id)
    if not can_view(session, viewer_id, target_id):
        raise NotFound("Not found")

    with storage_guard(session, "get_visible_profile"):
        user = session.get(User, target_id)
        if user is None:
            raise NotFound("Not found")
        media = list_media(session, target_id)

    photo = next((item.url for item in media if item.type == MediaType.photo), None)
    return VisibleProfile(user=summarize_user(user, photo), media=media)
