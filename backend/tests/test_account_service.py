from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from backend.core.db import storage_guard
from backend.core.errors import NotFound, StorageUnavailable
from backend.models.blocker import Blocker
from backend.models.like import Like
from backend.models.match import Match
from backend.models.profile_media import ProfileMedia
from backend.models.user import User
from backend.models.video_session import VideoSession
from backend.services.account_service import delete_account
from backend.services.block_service import block
from backend.services.like_service import record_like


def test_delete_account_removes_every_relation(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 2, 3)
    record_like(session, 1, 2)
    outcome = record_like(session, 2, 1)
    assert outcome.match_id is not None
    record_like(session, 3, 2)
    block(session, 3, 1)
    session.add(VideoSession(match_id=outcome.match_id, caller_id=1, callee_id=2))
    session.add(ProfileMedia(user_id=1, url="/p/1"))
    session.add(ProfileMedia(user_id=2, url="/p/2"))
    session.commit()

    delete_account(session, 1)

    assert session.get(User, 1) is None
    assert session.exec(select(Match)).all() == []
    assert session.exec(select(VideoSession)).all() == []
    assert session.exec(select(Blocker)).all() == []
    assert [(like.liker_id, like.liked_id) for like in session.exec(select(Like))] == [
        (3, 2)
    ]
    assert [media.user_id for media in session.exec(select(ProfileMedia))] == [2]


def test_delete_unknown_account(session: Session) -> None:
    with pytest.raises(NotFound):
        delete_account(session, 12345)


def test_storage_guard_wraps_connection_failures() -> None:
    fake_session = MagicMock()

    with pytest.raises(StorageUnavailable):
        with storage_guard(fake_session, "lookup"):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    fake_session.rollback.assert_called_once()


def test_storage_guard_survives_failed_rollback() -> None:
    fake_session = MagicMock()
    fake_session.rollback.side_effect = OperationalError(
        "ROLLBACK", {}, Exception("server closed the connection")
    )

    with pytest.raises(StorageUnavailable) as caught:
        with storage_guard(fake_session, "lookup"):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    assert isinstance(caught.value.__cause__, OperationalError)
    assert caught.value.__cause__.statement == "SELECT 1"
    fake_session.rollback.assert_called_once()


def test_storage_guard_leaves_other_errors_alone() -> None:
    fake_session = MagicMock()

    with pytest.raises(NotFound):
        with storage_guard(fake_session, "lookup"):
            raise NotFound()

    fake_session.rollback.assert_not_called()
