from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from sqlalchemy import case, desc, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.schema import Table
from sqlmodel import Session, select

from backend.core.db import storage_guard
from backend.core.errors import NotAuthorized, NotFound, is_unique_violation
from backend.models.match import Match, MatchListItem
from backend.models.user import User
from backend.services.block_service import not_blocked_either_direction
from backend.services.identity_pair import canonicalize, validate_identifier
from backend.services.profile_service import first_photo_urls, summarize_user

logger = logging.getLogger(__name__)

MATCH_TABLE = cast(Table, Match.__table__)  # type: ignore[attr-defined]


@dataclass(slots=True, frozen=True)
class MatchLookup:
    is_matched: bool
    match_id: int | None = None


def _find_match(session: Session, low: int, high: int) -> Match | None:
    return session.exec(
        select(Match).where(Match.user_a_id == low, Match.user_b_id == high)
    ).first()


def is_matched(session: Session, user_id: int, other_id: int) -> MatchLookup:
    low, high = canonicalize(user_id, other_id)
    with storage_guard(session, "is_matched"):
        match = _find_match(session, low, high)
    if match is None:
        return MatchLookup(is_matched=False)
    return MatchLookup(is_matched=True, match_id=match.id)


def create_match(session: Session, user_id: int, other_id: int) -> int:
    """Return the match id for the pair, inserting the canonical row if absent."""
    low, high = canonicalize(user_id, other_id)

    with storage_guard(session, "create_match"):
        existing = _find_match(session, low, high)
        if existing is not None and existing.id is not None:
            return existing.id

        match = Match(user_a_id=low, user_b_id=high)
        session.add(match)
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            if not is_unique_violation(exc):
                raise
            # A concurrent request inserted the same canonical pair first.
            existing = _find_match(session, low, high)
            if existing is None or existing.id is None:
                raise
            return existing.id
        session.refresh(match)

    logger.info("match %s created for users %s and %s", match.id, low, high)
    return cast(int, match.id)


def get_match(session: Session, match_id: int) -> Match:
    match_id = validate_identifier(match_id)
    with storage_guard(session, "get_match"):
        match = session.get(Match, match_id)
    if match is None:
        raise NotFound("Match not found.")
    return match


def get_counterpart(session: Session, match_id: int, viewer_id: int) -> int:
    """Resolve the other participant; only a participant may ask."""
    viewer_id = validate_identifier(viewer_id)
    match = get_match(session, match_id)
    if viewer_id == match.user_a_id:
        return match.user_b_id
    if viewer_id == match.user_b_id:
        return match.user_a_id
    raise NotAuthorized("User is not part of this match.")


def _counterpart_column(user_id: int):
    return case(
        (MATCH_TABLE.c.user_a_id == user_id, MATCH_TABLE.c.user_b_id),
        else_=MATCH_TABLE.c.user_a_id,
    )


def list_matches_for_user(
    session: Session,
    user_id: int,
    *,
    limit: int,
    offset: int,
) -> tuple[int, list[MatchListItem]]:
    user_id = validate_identifier(user_id)
    other_id = _counterpart_column(user_id)
    conditions = (
        or_(MATCH_TABLE.c.user_a_id == user_id, MATCH_TABLE.c.user_b_id == user_id),
        not_blocked_either_direction(user_id, other_id),
    )

    with storage_guard(session, "list_matches_for_user"):
        total_result = session.exec(
            select(func.count()).select_from(MATCH_TABLE).where(*conditions)
        ).one()
        total_count = int(
            total_result[0] if isinstance(total_result, tuple) else total_result
        )

        statement = (
            select(Match, User)
            .join(User, User.id == other_id)
            .where(*conditions)
            .order_by(
                desc(func.coalesce(MATCH_TABLE.c.last_chat_at, MATCH_TABLE.c.created_at)),
                desc(MATCH_TABLE.c.id),
            )
            .offset(offset)
            .limit(limit)
        )
        rows = list(session.exec(statement).all())
        photos = first_photo_urls(session, [cast(int, user.id) for _, user in rows])

    return total_count, [
        MatchListItem(
            match_id=cast(int, match.id),
            user=summarize_user(user, photos.get(cast(int, user.id))),
            created_at=match.created_at,
            last_chat_at=match.last_chat_at,
        )
        for match, user in rows
    ]
