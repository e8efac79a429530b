from __future__ import annotations

from collections.abc import Callable

import pytest
from sqlmodel import Session, select

from backend.core.errors import InvalidIdentifier, NotAuthorized, NotFound
from backend.models.like import Like
from backend.models.match import Match
from backend.services import like_service
from backend.services.block_service import block
from backend.services.like_service import record_like
from backend.services.match_service import is_matched


def test_one_sided_like_does_not_match(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(3, 7)

    outcome = record_like(session, 3, 7)

    assert not outcome.matched
    assert outcome.match_id is None
    assert not is_matched(session, 3, 7).is_matched


def test_mutual_like_creates_single_match(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(3, 7)
    record_like(session, 3, 7)

    outcome = record_like(session, 7, 3)
    assert outcome.matched
    assert outcome.match_id == is_matched(session, 3, 7).match_id

    again = record_like(session, 3, 7)
    assert again.matched
    assert again.match_id == outcome.match_id
    assert len(session.exec(select(Match)).all()) == 1
    assert len(session.exec(select(Like)).all()) == 2


def test_like_rejects_self_and_unknown_users(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1)
    with pytest.raises(InvalidIdentifier):
        record_like(session, 1, 1)
    with pytest.raises(NotFound):
        record_like(session, 1, 404)


def test_like_across_block_is_refused(
    session: Session, make_users: Callable[..., list[int]]
) -> None:
    make_users(1, 2)
    block(session, 2, 1)

    with pytest.raises(NotAuthorized):
        record_like(session, 1, 2)
    assert session.exec(select(Like)).all() == []


def test_like_stored_by_concurrent_request_still_matches(
    session: Session,
    make_users: Callable[..., list[int]],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    make_users(3, 7)
    record_like(session, 7, 3)

    real_has_like = like_service._has_like
    raced: list[bool] = []

    def has_like_after_other_writer(db: Session, liker_id: int, liked_id: int) -> bool:
        if (liker_id, liked_id) != (3, 7) or raced:
            return real_has_like(db, liker_id, liked_id)
        raced.append(True)
        with Session(db.get_bind()) as other:
            other.add(Like(liker_id=3, liked_id=7))
            other.commit()
        return False

    monkeypatch.setattr(like_service, "_has_like", has_like_after_other_writer)

    outcome = record_like(session, 3, 7)

    assert raced == [True]
    assert outcome.matched
    assert outcome.match_id == is_matched(session, 3, 7).match_id
    likes = session.exec(select(Like).where(Like.liker_id == 3)).all()
    assert [(like.liker_id, like.liked_id) for like in likes] == [(3, 7)]
    assert len(session.exec(select(Match)).all()) == 1
