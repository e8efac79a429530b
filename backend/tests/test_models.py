from __future__ import annotations

from datetime import timezone

import pytest
from sqlalchemy import DateTime
from sqlmodel import Session, SQLModel

from backend.models.blocker import Blocker
from backend.models.like import Like
from backend.models.match import Match
from backend.models.user import User
from backend.models.video_session import VideoSession


@pytest.mark.parametrize("model", [User, Match, Like, Blocker, VideoSession])
def test_timestamp_columns_keep_timezone(model: type[SQLModel]) -> None:
    columns = [
        column
        for column in model.__table__.columns  # type: ignore[attr-defined]
        if isinstance(column.type, DateTime)
    ]

    assert columns
    assert all(column.type.timezone for column in columns)


def test_new_rows_are_stamped_in_utc(session: Session) -> None:
    match = Match(user_a_id=1, user_b_id=2)
    assert match.created_at.tzinfo is timezone.utc

    session.add(match)
    session.commit()
    session.refresh(match)

    assert match.id is not None
    assert match.last_chat_at is None
