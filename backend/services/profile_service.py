from __future__ import annotations

from collections.abc import Iterable
from typing import cast

from sqlalchemy import asc
from sqlalchemy.sql.schema import Table
from sqlmodel import Session, select

from backend.models.profile_media import MediaType, ProfileMedia
from backend.models.user import User, UserSummary

MEDIA_TABLE = cast(Table, ProfileMedia.__table__)  # type: ignore[attr-defined]


def summarize_user(user: User, photo: str | None = None) -> UserSummary:
    return UserSummary(
        id=cast(int, user.id),
        name=user.name,
        image=user.image,
        immediate_available=user.immediate_available,
        photo=photo,
    )


def list_media(session: Session, user_id: int) -> list[ProfileMedia]:
    statement = (
        select(ProfileMedia)
        .where(MEDIA_TABLE.c.user_id == user_id)
        .order_by(asc(MEDIA_TABLE.c.sort_order), asc(MEDIA_TABLE.c.id))
    )
    return list(session.exec(statement).all())


def first_photo_urls(session: Session, user_ids: Iterable[int]) -> dict[int, str]:
    """Map each user to the url of their first photo in display order."""
    wanted = set(user_ids)
    if not wanted:
        return {}
    statement = (
        select(ProfileMedia)
        .where(MEDIA_TABLE.c.user_id.in_(wanted))
        .where(MEDIA_TABLE.c.type == MediaType.photo)
        .order_by(
            asc(MEDIA_TABLE.c.user_id),
            asc(MEDIA_TABLE.c.sort_order),
            asc(MEDIA_TABLE.c.id),
        )
    )
    photos: dict[int, str] = {}
    for media in session.exec(statement):
        photos.setdefault(media.user_id, media.url)
    return photos
